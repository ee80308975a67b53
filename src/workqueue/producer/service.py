import logging
import time

from workqueue.config import WorkQueueConfig
from workqueue.models import OutboundMessage
from workqueue.repository.message.abstract_interface import MessagePublisherInterface

logger = logging.getLogger(__name__)


class ProducerService:
    """
    Publishes a fixed, numbered sequence of persistent messages.

    Sends are paced by ``publish_interval``; after the last send the service
    waits ``grace_period`` so the client can flush before the connection is
    closed.
    """

    def __init__(
        self,
        publisher: MessagePublisherInterface,
        message_count: int = WorkQueueConfig.DEFAULT_MESSAGE_COUNT,
        publish_interval: float = WorkQueueConfig.DEFAULT_PUBLISH_INTERVAL,
        grace_period: float = WorkQueueConfig.DEFAULT_GRACE_PERIOD,
        message_template: str = WorkQueueConfig.DEFAULT_MESSAGE_TEMPLATE,
    ) -> None:
        if message_count < 1:
            raise ValueError(f"message_count must be positive, got {message_count}")
        if publish_interval < 0 or grace_period < 0:
            raise ValueError("publish_interval and grace_period must not be negative")

        self._publisher = publisher
        self._message_count = message_count
        self._publish_interval = publish_interval
        self._grace_period = grace_period
        self._message_template = message_template

        logger.info(
            "%s initialized with publisher %s",
            self.__class__.__name__,
            self._publisher,
        )

    def run(self) -> list[OutboundMessage]:
        """
        Publish every message of the run, in order.

        :return: The messages that were sent, in send order.
        :raises PublishError: If the publisher fails; earlier sends stand.
        """
        sent: list[OutboundMessage] = []
        for sequence in range(1, self._message_count + 1):
            message = OutboundMessage.create(
                sequence=sequence, template=self._message_template
            )
            self._publisher.publish(message.content, persistent=message.persistent)
            sent.append(message)
            logger.info("[x] Sent: %s", message.text)

            if sequence < self._message_count:
                time.sleep(self._publish_interval)

        logger.debug("Waiting %.2fs before closing", self._grace_period)
        time.sleep(self._grace_period)

        logger.info("Published %d messages", len(sent))
        return sent
