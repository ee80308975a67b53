import logging
import os
import time
from typing import Optional

from amqpstorm import AMQPError

from workqueue.config import WorkQueueConfig
from workqueue.exceptions import ConsumeError
from workqueue.models import Delivery
from workqueue.repository.message.abstract_interface import MessageSubscriberInterface

logger = logging.getLogger(__name__)


class WorkerService:
    """
    Processes deliveries one at a time and acknowledges each.

    Processing is simulated with a fixed delay between receipt and
    acknowledgment. Every delivery is acknowledged; there is no rejection
    path.
    """

    def __init__(
        self,
        subscriber: MessageSubscriberInterface,
        processing_delay: float = WorkQueueConfig.DEFAULT_PROCESSING_DELAY,
        worker_id: Optional[int] = None,
    ) -> None:
        if processing_delay < 0:
            raise ValueError(
                f"processing_delay must not be negative, got {processing_delay}"
            )

        self._subscriber = subscriber
        self._processing_delay = processing_delay
        self._worker_id = worker_id if worker_id is not None else os.getpid()
        self._pending: Optional[Delivery] = None
        self._processed_count = 0

        logger.info(
            "%s initialized with subscriber %s",
            self.__class__.__name__,
            self._subscriber,
        )

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def pending(self) -> Optional[Delivery]:
        return self._pending

    @property
    def processed_count(self) -> int:
        return self._processed_count

    def run(self) -> None:
        """
        Consume until the delivery stream ends.

        With a live broker the stream never ends; the process runs until
        interrupted.
        """
        logger.info("[*] Waiting for messages. To exit press CTRL+C")
        for delivery in self._subscriber.deliveries():
            self._handle_delivery(delivery)
        logger.info("Delivery stream ended after %d messages", self._processed_count)

    def _handle_delivery(self, delivery: Delivery) -> None:
        if self._pending is not None:
            raise ConsumeError(
                self._subscriber.queue_name,
                message=f"Received {delivery!r} while {self._pending!r} is still pending",
            )
        self._pending = delivery
        logger.info("[Worker %d] Received: %s", self._worker_id, delivery.text)

        time.sleep(self._processing_delay)

        logger.info("[Worker %d] Done: %s", self._worker_id, delivery.text)
        try:
            delivery.ack()
        except AMQPError as e:
            raise ConsumeError(self._subscriber.queue_name, cause=e) from e

        self._pending = None
        self._processed_count += 1
