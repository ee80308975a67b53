import logging

from amqpstorm import AMQPError, Channel

from workqueue.exceptions import QueueDeclareError
from workqueue.repository.rabbitmq.config import QueueConfig

logger = logging.getLogger(__name__)


def declare_queue(channel: Channel, queue_config: QueueConfig) -> str:
    """
    Declare a queue with the configured settings.

    Declaration is idempotent on the broker as long as the flags match the
    existing queue. A mismatch is reported by the broker as a channel error.

    :param channel: The AMQP channel to use for declaration.
    :param queue_config: Name and flags of the queue.
    :return: The name of the declared queue as reported by the broker.
    :raises QueueDeclareError: If the declaration fails.
    """
    queue_name = queue_config.build_name()
    try:
        result = channel.queue.declare(
            queue=queue_name,
            durable=queue_config.durable,
            exclusive=queue_config.exclusive,
            auto_delete=queue_config.auto_delete,
        )
    except AMQPError as e:
        raise QueueDeclareError(queue_name, cause=e) from e

    if not result:
        logger.error("Unable to declare queue with name %s", queue_name)
        raise QueueDeclareError(queue_name, message="Broker returned no declare result")

    # mutate config to store actual name
    queue_config.actual_queue_name = result.get("queue", queue_name)
    logger.info(
        "Queue declared: %s (durable=%s, messages=%s, consumers=%s)",
        queue_config.actual_queue_name,
        queue_config.durable,
        result.get("message_count"),
        result.get("consumer_count"),
    )
    return queue_config.actual_queue_name
