"""
Custom exceptions for the workqueue application.

Every broker-facing failure is raised as one of a small closed set of error
kinds so callers can tell a refused connection from a rejected publish.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    CONNECTION = "connection"
    DECLARE = "declare"
    PUBLISH = "publish"
    CONSUME = "consume"


class WorkQueueError(Exception):
    """Base class for broker operation failures."""

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class BrokerConnectionError(WorkQueueError):
    """Raised when the broker connection or a channel cannot be opened."""

    kind = ErrorKind.CONNECTION

    def __init__(
        self, url: str, cause: Optional[BaseException] = None, message: str = None
    ):
        self.url = url
        if message is None:
            message = f"Unable to connect to broker at {url}"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, cause)


class QueueDeclareError(WorkQueueError):
    """Raised when the broker refuses or fails a queue declaration."""

    kind = ErrorKind.DECLARE

    def __init__(
        self, queue_name: str, cause: Optional[BaseException] = None, message: str = None
    ):
        self.queue_name = queue_name
        if message is None:
            message = f"Failed to declare queue '{queue_name}'"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, cause)


class PublishError(WorkQueueError):
    """Raised when a message cannot be published to a queue."""

    kind = ErrorKind.PUBLISH

    def __init__(
        self, queue_name: str, cause: Optional[BaseException] = None, message: str = None
    ):
        self.queue_name = queue_name
        if message is None:
            message = f"Failed to publish to queue '{queue_name}'"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, cause)


class ConsumeError(WorkQueueError):
    """Raised when consuming or acknowledging deliveries fails."""

    kind = ErrorKind.CONSUME

    def __init__(
        self, queue_name: str, cause: Optional[BaseException] = None, message: str = None
    ):
        self.queue_name = queue_name
        if message is None:
            message = f"Failed to consume from queue '{queue_name}'"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, cause)
