"""Temporal Client - for starting and querying workflows.

Example usage:
    from app.temporal.client import start_workflow, execute_workflow
    from app.temporal.schemas import ClassroomDownloadInput
    from app.temporal.workflows import ClassroomDownloadWorkflow

    # Start and wait for result
    result = await execute_workflow(
        ClassroomDownloadWorkflow.run,
        ClassroomDownloadInput(url="https://www.skool.com/group/classroom/xxxx", cookies_file="cookies.json"),
    )

    # Or start and get handle for async tracking
    handle = await start_workflow(
        ClassroomDownloadWorkflow.run,
        ClassroomDownloadInput(url="https://www.skool.com/group/classroom/xxxx", cookies_file="cookies.json"),
    )
    progress = await handle.query(ClassroomDownloadWorkflow.get_progress)
    result = await handle.result()
"""

import uuid
from typing import Any

from temporalio.client import Client, WorkflowHandle
from temporalio.contrib.pydantic import pydantic_data_converter

from app.core.configs import app_config
from app.core.services.log import get_log_service

logger = get_log_service()


class _ClientHolder:
    """Holder for singleton Temporal client instance."""

    instance: Client | None = None


async def get_temporal_client() -> Client:
    """Get or create the Temporal client.

    Uses a singleton pattern to reuse connections.
    """
    if _ClientHolder.instance is None:
        logger.info('Connecting to Temporal', host=app_config.TEMPORAL_HOST)

        try:
            _ClientHolder.instance = await Client.connect(
                app_config.TEMPORAL_HOST,
                namespace=app_config.TEMPORAL_NAMESPACE,
                data_converter=pydantic_data_converter,
            )

            logger.info('Connected to Temporal', namespace=app_config.TEMPORAL_NAMESPACE)
        except Exception:
            logger.exception('Failed to connect to Temporal', host=app_config.TEMPORAL_HOST)
            raise

    return _ClientHolder.instance


async def start_workflow(
    workflow: Any,
    arg: Any,
    *,
    id: str | None = None,
    task_queue: str | None = None,
) -> WorkflowHandle:
    """Start a workflow and return a handle.

    Args:
        workflow: The workflow run method (e.g., ClassroomDownloadWorkflow.run)
        arg: The workflow input
        id: Optional workflow ID (auto-generated if not provided)
        task_queue: Optional task queue (uses default if not provided)

    Returns:
        WorkflowHandle to query/wait for the workflow
    """
    client = await get_temporal_client()

    workflow_id = id or f'classroom-download-{uuid.uuid4().hex[:12]}'
    queue = task_queue or app_config.TEMPORAL_TASK_QUEUE

    return await client.start_workflow(
        workflow,
        arg,
        id=workflow_id,
        task_queue=queue,
    )


async def execute_workflow(
    workflow: Any,
    arg: Any,
    *,
    id: str | None = None,
    task_queue: str | None = None,
) -> Any:
    """Start a workflow and wait for its result."""
    handle = await start_workflow(workflow, arg, id=id, task_queue=task_queue)
    return await handle.result()
