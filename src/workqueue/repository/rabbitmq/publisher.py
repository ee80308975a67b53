"""
RabbitMQ publisher implementation.

Publishes raw message bodies straight to a named queue through the default
exchange.
"""

import logging

from amqpstorm import AMQPError, Channel

from workqueue.exceptions import PublishError
from workqueue.repository.message.abstract_interface import MessagePublisherInterface
from workqueue.repository.rabbitmq.config import QueueConfig
from workqueue.repository.rabbitmq.util import declare_queue

logger = logging.getLogger(__name__)

PERSISTENT_DELIVERY_MODE = 2
TRANSIENT_DELIVERY_MODE = 1


class RabbitQueuePublisher(MessagePublisherInterface):
    """
    Publishes messages to a single work queue.

    The queue is declared on construction, so the publisher never sends to
    a queue that does not exist.
    """

    def __init__(self, channel: Channel, queue_config: QueueConfig) -> None:
        """
        :param channel: An open AMQPStorm channel.
        :param queue_config: The queue to declare and publish to.
        :raises QueueDeclareError: If the queue cannot be declared.
        """
        self._channel = channel
        self._queue_config = queue_config
        self._queue_name = declare_queue(self._channel, self._queue_config)

        logger.info("RabbitQueuePublisher initialized for queue %s", self._queue_name)

    @property
    def queue_name(self) -> str:
        return self._queue_name

    def publish(self, body: bytes, persistent: bool = True) -> None:
        """
        Publish a message body to the queue.

        :param body: Raw message payload, sent without an envelope.
        :param persistent: Mark the message for on-disk storage by the broker.
        :raises PublishError: If the client fails to publish.
        """
        properties = {
            "delivery_mode": PERSISTENT_DELIVERY_MODE
            if persistent
            else TRANSIENT_DELIVERY_MODE
        }
        try:
            self._channel.basic.publish(
                body=body,
                routing_key=self._queue_name,
                exchange="",
                properties=properties,
            )
        except AMQPError as e:
            raise PublishError(self._queue_name, cause=e) from e

        logger.debug(
            "Message published to queue %s (persistent=%s)",
            self._queue_name,
            persistent,
        )

    def shutdown(self) -> None:
        """
        Shutdown the publisher by closing the channel.
        """
        logger.info("Shutting down RabbitQueuePublisher...")
        try:
            if self._channel.is_open:
                self._channel.close()
                logger.info("Channel closed.")
        except Exception as e:
            logger.exception("Error closing channel: %s", e)
