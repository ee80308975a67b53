"""
Repository package for broker access.

This package keeps the AMQP client behind small publisher and subscriber
interfaces so the producer and worker services never touch it directly.
"""

from .message.abstract_interface import (
    MessagePublisherInterface,
    MessageSubscriberInterface,
)

__all__ = [
    "MessagePublisherInterface",
    "MessageSubscriberInterface",
]
