import logging
from typing import Annotated

import typer

from workqueue.config import ConnectionSettings, WorkerSettings, WorkQueueConfig
from workqueue.exceptions import WorkQueueError
from workqueue.logging_config import setup_logging
from workqueue.repository.rabbitmq.config import QueueConfig
from workqueue.repository.rabbitmq.connection import BrokerConnection
from workqueue.repository.rabbitmq.subscriber import RabbitQueueSubscriber
from workqueue.worker.service import WorkerService

app = typer.Typer()
logger = logging.getLogger(__name__)


def consume_messages(
    connection_settings: ConnectionSettings, worker_settings: WorkerSettings
) -> int:
    """
    Run the worker against the broker until the delivery stream ends.

    The connection is released on every exit path, including interrupts.

    :return: Number of deliveries processed.
    :raises WorkQueueError: If connecting, declaring or consuming fails.
    """
    with BrokerConnection(connection_settings.rabbitmq_url) as connection:
        subscriber = RabbitQueueSubscriber(
            channel=connection.channel(),
            queue_config=QueueConfig.work_queue(connection_settings.queue_name),
            prefetch_count=worker_settings.prefetch_count,
        )
        service = WorkerService(
            subscriber=subscriber,
            processing_delay=worker_settings.processing_delay,
        )
        try:
            service.run()
        finally:
            subscriber.shutdown()
    return service.processed_count


@app.command()
def start(
    ctx: typer.Context,
    processing_delay: Annotated[
        float,
        typer.Option(
            envvar="WORKQUEUE_PROCESSING_DELAY",
            min=0.0,
            help="Simulated processing time per message in seconds",
        ),
    ] = WorkQueueConfig.DEFAULT_PROCESSING_DELAY,
    prefetch_count: Annotated[
        int, typer.Option(envvar="WORKQUEUE_PREFETCH_COUNT", min=1)
    ] = WorkQueueConfig.DEFAULT_PREFETCH_COUNT,
):
    connection_settings: ConnectionSettings = ctx.obj
    worker_settings = WorkerSettings(
        processing_delay=processing_delay,
        prefetch_count=prefetch_count,
    )

    try:
        processed = consume_messages(connection_settings, worker_settings)
    except KeyboardInterrupt:
        logger.info("Worker interrupted, exiting")
        return
    except WorkQueueError as e:
        logger.exception("Worker failed (%s error): %s", e.kind.value, e)
        raise typer.Exit(code=1)

    logger.info("Worker finished after %d messages", processed)


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
    setup_logging(microservice_name=WorkQueueConfig.WORKER)

    if not queue_name.strip():
        raise typer.BadParameter("must not be empty", param_hint="--queue-name")

    ctx.obj = ConnectionSettings(rabbitmq_url=rabbitmq_url, queue_name=queue_name)
