"""
Shared pytest fixtures and utilities for testing.

This module provides a mock message infrastructure for exercising the
producer and worker without a RabbitMQ broker.

### Core Mock Classes

- `MockMessagePublisher`: Mock implementation of `MessagePublisherInterface`
  - Records every published body and its persistence flag
  - Can be told to fail on a given call

- `MockMessageSubscriber`: Mock implementation of `MessageSubscriberInterface`
  - Queues bodies that are handed out as `Delivery` objects
  - Each delivery wraps a `Mock` amqpstorm message whose `ack` can be inspected

- `make_amqp_message`: builds a `Mock` that quacks like `amqpstorm.Message`

### Available Fixtures

- `mock_message_publisher`: Fresh MockMessagePublisher instance
- `mock_message_subscriber`: Fresh MockMessageSubscriber instance
- `mock_channel`: `Mock` amqpstorm channel whose queue declaration succeeds
- `no_sleep`: patches `time.sleep` in both services and records the delays

### Usage Example
```python
def test_round_trip(mock_message_publisher, mock_message_subscriber, no_sleep):
    ProducerService(mock_message_publisher).run()
    mock_message_subscriber.queue_messages(mock_message_publisher.published_bodies)
    WorkerService(mock_message_subscriber).run()
```
"""

import itertools
from typing import Iterator, List, Optional, Tuple
from unittest.mock import Mock, patch

import pytest

from workqueue.config import WorkQueueConfig
from workqueue.models import Delivery
from workqueue.repository.message.abstract_interface import (
    MessagePublisherInterface,
    MessageSubscriberInterface,
)

_delivery_tags = itertools.count(1)


def make_amqp_message(body: bytes, delivery_tag: Optional[int] = None) -> Mock:
    """Create a Mock with the parts of ``amqpstorm.Message`` the code uses."""
    message = Mock()
    message.body = body
    message.delivery_tag = (
        delivery_tag if delivery_tag is not None else next(_delivery_tags)
    )
    message.redelivered = False
    return message


class MockMessagePublisher(MessagePublisherInterface):
    """
    Mock implementation of MessagePublisherInterface for testing.

    This mock tracks all published messages and allows inspection of what was sent.
    """

    def __init__(
        self,
        queue_name: str = WorkQueueConfig.DEFAULT_QUEUE_NAME,
        fail_on_call: Optional[int] = None,
        error: Optional[Exception] = None,
    ):
        self._queue_name = queue_name
        self._fail_on_call = fail_on_call
        self._error = error
        self.published: List[Tuple[bytes, bool]] = []
        self.publish_call_count = 0
        self.shutdown_called = False

    @property
    def queue_name(self) -> str:
        return self._queue_name

    @property
    def published_bodies(self) -> List[bytes]:
        return [body for body, _ in self.published]

    def publish(self, body: bytes, persistent: bool = True) -> None:
        """Record the published message for later inspection."""
        self.publish_call_count += 1
        if self._fail_on_call is not None and self.publish_call_count == self._fail_on_call:
            raise self._error
        self.published.append((body, persistent))

    def shutdown(self) -> None:
        self.shutdown_called = True


class MockMessageSubscriber(MessageSubscriberInterface):
    """
    Mock implementation of MessageSubscriberInterface for testing.

    Queued bodies are handed out in order as deliveries, then the stream ends.
    """

    def __init__(self, queue_name: str = WorkQueueConfig.DEFAULT_QUEUE_NAME):
        self._queue_name = queue_name
        self._queued_messages: List[Mock] = []
        self.delivered: List[Delivery] = []
        self.shutdown_called = False

    @property
    def queue_name(self) -> str:
        return self._queue_name

    def queue_message(self, body: bytes) -> Mock:
        """Add a body to be handed out by ``deliveries()``; returns the raw message mock."""
        message = make_amqp_message(body)
        self._queued_messages.append(message)
        return message

    def queue_messages(self, bodies: List[bytes]) -> List[Mock]:
        return [self.queue_message(body) for body in bodies]

    def deliveries(self) -> Iterator[Delivery]:
        while self._queued_messages:
            delivery = Delivery(self._queued_messages.pop(0))
            self.delivered.append(delivery)
            yield delivery

    def shutdown(self) -> None:
        self.shutdown_called = True


@pytest.fixture
def mock_message_publisher():
    """Create a mock MessagePublisher for testing."""
    return MockMessagePublisher()


@pytest.fixture
def mock_message_subscriber():
    """Create a mock MessageSubscriber for testing."""
    return MockMessageSubscriber()


@pytest.fixture
def mock_channel():
    """Create a Mock amqpstorm channel with a successful queue declaration."""
    channel = Mock()
    channel.is_open = True
    channel.queue.declare.return_value = {
        "queue": WorkQueueConfig.DEFAULT_QUEUE_NAME,
        "message_count": 0,
        "consumer_count": 0,
    }
    channel.basic.consume.return_value = "consumer-tag-123"
    return channel


@pytest.fixture
def no_sleep():
    """Patch out the service delays and record them in call order."""
    sleeper = Mock()
    # both services call time.sleep through the shared time module
    with patch("time.sleep", sleeper):
        yield sleeper
