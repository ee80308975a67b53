"""
RabbitMQ subscriber implementation.

Consumes a single work queue with manual acknowledgment and a bounded
number of unacknowledged deliveries.
"""

import logging
from typing import Iterator, Optional

from amqpstorm import AMQPError, Channel

from workqueue.exceptions import ConsumeError
from workqueue.models import Delivery
from workqueue.repository.message.abstract_interface import MessageSubscriberInterface
from workqueue.repository.rabbitmq.config import QueueConfig
from workqueue.repository.rabbitmq.util import declare_queue

logger = logging.getLogger(__name__)


class RabbitQueueSubscriber(MessageSubscriberInterface):
    """
    Subscribes to a work queue and exposes deliveries as a blocking iterator.

    The broker will not hand out more than ``prefetch_count`` deliveries
    before earlier ones are acknowledged.
    """

    def __init__(
        self,
        channel: Channel,
        queue_config: QueueConfig,
        prefetch_count: int = 1,
    ) -> None:
        """
        :param channel: An open AMQPStorm channel.
        :param queue_config: The queue to declare and consume from.
        :param prefetch_count: Maximum unacknowledged deliveries for this consumer.
        :raises QueueDeclareError: If the queue cannot be declared.
        :raises ConsumeError: If the prefetch limit cannot be applied.
        """
        if prefetch_count < 1:
            raise ValueError(f"prefetch_count must be at least 1, got {prefetch_count}")

        self._channel = channel
        self._queue_config = queue_config
        self._prefetch_count = prefetch_count
        self._consumer_tag: Optional[str] = None

        self._queue_name = declare_queue(self._channel, self._queue_config)

        try:
            self._channel.basic.qos(prefetch_count=self._prefetch_count)
        except AMQPError as e:
            raise ConsumeError(self._queue_name, cause=e) from e

        logger.info(
            "RabbitQueueSubscriber initialized for queue %s with prefetch=%d",
            self._queue_name,
            self._prefetch_count,
        )

    @property
    def queue_name(self) -> str:
        return self._queue_name

    @property
    def prefetch_count(self) -> int:
        return self._prefetch_count

    def deliveries(self) -> Iterator[Delivery]:
        """
        Start consuming and yield deliveries in broker order.

        Blocks while the queue is empty. Deliveries must be acknowledged by
        the caller.

        :raises ConsumeError: If consuming fails.
        """
        try:
            self._consumer_tag = self._channel.basic.consume(
                queue=self._queue_name, no_ack=False
            )
            logger.info(
                "Consuming from queue %s with consumer tag %s",
                self._queue_name,
                self._consumer_tag,
            )
            for message in self._channel.build_inbound_messages(
                break_on_empty=False, auto_decode=False
            ):
                delivery = Delivery(message)
                logger.debug("Delivery received: %s", delivery.delivery_tag)
                yield delivery
        except AMQPError as e:
            raise ConsumeError(self._queue_name, cause=e) from e

    def shutdown(self) -> None:
        """
        Shutdown the subscriber by cancelling the consumer and closing the channel.
        """
        logger.info("Shutting down RabbitQueueSubscriber...")
        if self._consumer_tag and self._channel.is_open:
            try:
                self._channel.basic.cancel(self._consumer_tag)
                logger.debug("Consumer cancelled")
            except Exception as e:
                logger.debug("Error cancelling consumer: %s", e)
        self._consumer_tag = None

        try:
            if self._channel.is_open:
                self._channel.close()
                logger.info("Channel closed.")
        except Exception as e:
            logger.exception("Error closing channel: %s", e)
