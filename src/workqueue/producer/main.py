import logging
from typing import Annotated

import typer

from workqueue.config import ConnectionSettings, ProducerSettings, WorkQueueConfig
from workqueue.exceptions import WorkQueueError
from workqueue.logging_config import setup_logging
from workqueue.producer.service import ProducerService
from workqueue.repository.rabbitmq.config import QueueConfig
from workqueue.repository.rabbitmq.connection import BrokerConnection
from workqueue.repository.rabbitmq.publisher import RabbitQueuePublisher

app = typer.Typer()
logger = logging.getLogger(__name__)


def publish_messages(
    connection_settings: ConnectionSettings, producer_settings: ProducerSettings
) -> int:
    """
    Run one producer pass against the broker.

    The connection is released on every exit path.

    :return: Number of messages published.
    :raises WorkQueueError: If connecting, declaring or publishing fails.
    """
    with BrokerConnection(connection_settings.rabbitmq_url) as connection:
        publisher = RabbitQueuePublisher(
            channel=connection.channel(),
            queue_config=QueueConfig.work_queue(connection_settings.queue_name),
        )
        try:
            service = ProducerService(
                publisher=publisher,
                message_count=producer_settings.message_count,
                publish_interval=producer_settings.publish_interval,
                grace_period=producer_settings.grace_period,
                message_template=producer_settings.message_template,
            )
            sent = service.run()
        finally:
            publisher.shutdown()
    return len(sent)


@app.command()
def start(
    ctx: typer.Context,
    message_count: Annotated[
        int, typer.Option(envvar="WORKQUEUE_MESSAGE_COUNT", min=1)
    ] = WorkQueueConfig.DEFAULT_MESSAGE_COUNT,
    publish_interval: Annotated[
        float,
        typer.Option(
            envvar="WORKQUEUE_PUBLISH_INTERVAL",
            min=0.0,
            help="Seconds to wait between sends",
        ),
    ] = WorkQueueConfig.DEFAULT_PUBLISH_INTERVAL,
    grace_period: Annotated[
        float,
        typer.Option(
            envvar="WORKQUEUE_GRACE_PERIOD",
            min=0.0,
            help="Seconds to wait after the last send before closing",
        ),
    ] = WorkQueueConfig.DEFAULT_GRACE_PERIOD,
):
    connection_settings: ConnectionSettings = ctx.obj
    producer_settings = ProducerSettings(
        message_count=message_count,
        publish_interval=publish_interval,
        grace_period=grace_period,
        message_template=WorkQueueConfig.DEFAULT_MESSAGE_TEMPLATE,
    )

    try:
        published = publish_messages(connection_settings, producer_settings)
    except WorkQueueError as e:
        logger.exception("Producer failed (%s error): %s", e.kind.value, e)
        raise typer.Exit(code=1)

    logger.info(
        "Producer finished: %d messages sent to %s",
        published,
        connection_settings.queue_name,
    )


@app.callback()
def callback(
    ctx: typer.Context,
    rabbitmq_url: Annotated[
        str, typer.Option(envvar="WORKQUEUE_RABBITMQ_URL")
    ] = WorkQueueConfig.DEFAULT_RABBITMQ_URL,
    queue_name: Annotated[
        str, typer.Option(envvar="WORKQUEUE_QUEUE_NAME")
    ] = WorkQueueConfig.DEFAULT_QUEUE_NAME,
):
    setup_logging(microservice_name=WorkQueueConfig.PRODUCER)

    if not queue_name.strip():
        raise typer.BadParameter("must not be empty", param_hint="--queue-name")

    ctx.obj = ConnectionSettings(rabbitmq_url=rabbitmq_url, queue_name=queue_name)
