"""
Test RabbitQueuePublisher.
"""

import pytest
from amqpstorm import AMQPChannelError, AMQPConnectionError

from workqueue.exceptions import ErrorKind, PublishError, QueueDeclareError
from workqueue.repository.rabbitmq.config import QueueConfig
from workqueue.repository.rabbitmq.publisher import (
    PERSISTENT_DELIVERY_MODE,
    TRANSIENT_DELIVERY_MODE,
    RabbitQueuePublisher,
)


def test_publisher_declares_durable_queue(mock_channel):
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))

    mock_channel.queue.declare.assert_called_once_with(
        queue="test_queue", durable=True, exclusive=False, auto_delete=False
    )
    assert publisher.queue_name == "test_queue"


def test_publish_persistent_to_default_exchange(mock_channel):
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))
    body = "Test mesajı 1".encode("utf-8")

    publisher.publish(body)

    mock_channel.basic.publish.assert_called_once_with(
        body=body,
        routing_key="test_queue",
        exchange="",
        properties={"delivery_mode": PERSISTENT_DELIVERY_MODE},
    )


def test_publish_transient(mock_channel):
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))

    publisher.publish(b"scratch", persistent=False)

    _, kwargs = mock_channel.basic.publish.call_args
    assert kwargs["properties"] == {"delivery_mode": TRANSIENT_DELIVERY_MODE}


def test_publish_failure_is_typed(mock_channel):
    mock_channel.basic.publish.side_effect = AMQPConnectionError("socket closed")
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))

    with pytest.raises(PublishError) as excinfo:
        publisher.publish(b"payload")

    assert excinfo.value.kind is ErrorKind.PUBLISH
    assert isinstance(excinfo.value.__cause__, AMQPConnectionError)


def test_declare_failure_prevents_construction(mock_channel):
    mock_channel.queue.declare.side_effect = AMQPChannelError("access refused")

    with pytest.raises(QueueDeclareError):
        RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))
    mock_channel.basic.publish.assert_not_called()


def test_shutdown_closes_channel(mock_channel):
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))

    publisher.shutdown()

    mock_channel.close.assert_called_once()


def test_shutdown_swallows_close_errors(mock_channel):
    mock_channel.close.side_effect = AMQPChannelError("already closed")
    publisher = RabbitQueuePublisher(mock_channel, QueueConfig.work_queue("test_queue"))

    publisher.shutdown()
