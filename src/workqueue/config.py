"""
Configuration constants for the workqueue application.

This module contains centralized defaults for the broker connection, the
shared work queue and the producer/worker roles.
"""

from dataclasses import dataclass

# Global service name for logging
SERVICE_NAME = "workqueue"


@dataclass(frozen=True)
class ConnectionSettings:
    """Broker settings shared by the producer and the worker."""

    rabbitmq_url: str
    queue_name: str


@dataclass(frozen=True)
class ProducerSettings:
    """Settings for a single producer run."""

    message_count: int
    publish_interval: float
    grace_period: float
    message_template: str


@dataclass(frozen=True)
class WorkerSettings:
    """Settings for a worker process."""

    processing_delay: float
    prefetch_count: int


class WorkQueueConfig:
    """Centralized configuration for workqueue services."""

    # Role names (used for log identification)
    PRODUCER = "producer"
    WORKER = "worker"

    # Broker defaults
    DEFAULT_RABBITMQ_URL = "amqp://localhost"
    DEFAULT_QUEUE_NAME = "test_queue"

    # Producer defaults
    DEFAULT_MESSAGE_COUNT = 10
    DEFAULT_PUBLISH_INTERVAL = 1.0
    DEFAULT_GRACE_PERIOD = 0.5
    DEFAULT_MESSAGE_TEMPLATE = "Test mesajı {sequence}"

    # Worker defaults
    DEFAULT_PROCESSING_DELAY = 2.0
    DEFAULT_PREFETCH_COUNT = 1
