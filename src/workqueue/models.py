from enum import Enum

from amqpstorm import Message
from pydantic import BaseModel, Field


class DeliveryState(Enum):
    PENDING = "PENDING"
    # terminal - the broker has dropped the message from the queue
    ACKNOWLEDGED = "ACKNOWLEDGED"


class OutboundMessage(BaseModel):
    """A message body ready to be published to the work queue."""

    sequence: int = Field(ge=1)
    content: bytes
    persistent: bool = True

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @classmethod
    def create(
        cls, sequence: int, template: str, persistent: bool = True
    ) -> "OutboundMessage":
        """
        Build the message for a position in the producer run.

        :param sequence: 1-based position of the message.
        :param template: Text template with a ``{sequence}`` placeholder.
        :param persistent: Whether the broker should store the message on disk.
        """
        text = template.format(sequence=sequence)
        return cls(
            sequence=sequence, content=text.encode("utf-8"), persistent=persistent
        )


class Delivery:
    """
    A message handed to this consumer by the broker, awaiting acknowledgment.

    Wraps the client library message so the worker only sees raw bytes and
    the PENDING -> ACKNOWLEDGED lifecycle.
    """

    def __init__(self, message: Message) -> None:
        self._message = message
        self._state = DeliveryState.PENDING

    @property
    def state(self) -> DeliveryState:
        return self._state

    @property
    def content(self) -> bytes:
        body = self._message.body
        if isinstance(body, str):
            return body.encode("utf-8")
        return bytes(body)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def delivery_tag(self) -> int:
        return self._message.delivery_tag

    @property
    def redelivered(self) -> bool:
        return bool(self._message.redelivered)

    def ack(self) -> None:
        """
        Acknowledge the delivery, releasing it from the queue.

        :raises ValueError: If the delivery was already acknowledged.
        """
        if self._state is DeliveryState.ACKNOWLEDGED:
            raise ValueError(f"Delivery {self.delivery_tag} already acknowledged")
        self._message.ack()
        self._state = DeliveryState.ACKNOWLEDGED

    def __repr__(self) -> str:
        return f"Delivery(delivery_tag={self.delivery_tag}, state={self._state.value})"
