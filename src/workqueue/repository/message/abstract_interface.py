import abc
from typing import Iterator

from workqueue.models import Delivery


class MessagePublisherInterface(abc.ABC):
    @property
    @abc.abstractmethod
    def queue_name(self) -> str:
        pass

    @abc.abstractmethod
    def publish(self, body: bytes, persistent: bool = True) -> None:
        pass

    @abc.abstractmethod
    def shutdown(self) -> None:
        pass


class MessageSubscriberInterface(abc.ABC):
    @property
    @abc.abstractmethod
    def queue_name(self) -> str:
        pass

    @abc.abstractmethod
    def deliveries(self) -> Iterator[Delivery]:
        """
        Yield deliveries from the message provider as they arrive.

        Blocking
        """
        pass

    @abc.abstractmethod
    def shutdown(self) -> None:
        pass
