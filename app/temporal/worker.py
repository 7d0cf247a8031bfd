"""Temporal Worker - runs the classroom download workflow and its activities.

Usage:
    python -m app.temporal.worker
"""

import asyncio
import signal
import sys
from typing import Any

from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.worker import Worker

from app.core.configs import app_config
from app.core.services.log import get_log_service
from app.temporal.activities import ACTIVITIES
from app.temporal.workflows import WORKFLOWS

logger = get_log_service()


async def run_worker() -> None:
    """Run the Temporal worker."""
    activity_names = [a.__name__ for a in ACTIVITIES]
    logger.info(f'Registered workflows: {[w.__name__ for w in WORKFLOWS]}')
    logger.info(f'Registered activities: {activity_names}')

    logger.info(f'Connecting to Temporal at {app_config.TEMPORAL_HOST}...')

    client = await Client.connect(
        app_config.TEMPORAL_HOST,
        namespace=app_config.TEMPORAL_NAMESPACE,
        data_converter=pydantic_data_converter,
    )

    logger.info(f'Connected! Task queue: {app_config.TEMPORAL_TASK_QUEUE}')

    worker = Worker(
        client,
        task_queue=app_config.TEMPORAL_TASK_QUEUE,
        workflows=WORKFLOWS,
        activities=ACTIVITIES,
    )

    shutdown_event = asyncio.Event()

    def signal_handler(_sig: int, _frame: Any) -> None:
        logger.info('Shutting down...')
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info('Starting worker...')

    async with worker:
        logger.info(f'Worker started! Registered {len(ACTIVITIES)} activities: {activity_names}')
        await shutdown_event.wait()


def main() -> None:
    try:
        asyncio.run(run_worker())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == '__main__':
    main()
