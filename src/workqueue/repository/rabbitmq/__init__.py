"""
RabbitMQ messaging implementation.

This module provides a minimal RabbitMQ work-queue layer: a scoped
connection owner, a queue publisher and a prefetch-limited subscriber.

Public API:
    - BrokerConnection: Owns the AMQP connection and its channels
    - QueueConfig: Name and flags of a queue
    - RabbitQueuePublisher: Publishes raw bodies to a queue
    - RabbitQueueSubscriber: Yields deliveries from a queue
"""

from .config import QueueConfig
from .connection import BrokerConnection
from .publisher import RabbitQueuePublisher
from .subscriber import RabbitQueueSubscriber
from .util import declare_queue

__all__ = [
    "BrokerConnection",
    "QueueConfig",
    "RabbitQueuePublisher",
    "RabbitQueueSubscriber",
    "declare_queue",
]
