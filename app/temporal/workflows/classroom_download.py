"""Workflow for downloading every video of a classroom page.

Two steps:
1. Scrape the classroom page for video URLs (one browser session, no retries)
2. Download each video in its own activity

A download that fails after its retries is recorded and the remaining
videos are still downloaded.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy
from temporalio.exceptions import ActivityError

with workflow.unsafe.imports_passed_through():
    from app.temporal.activities.classroom import download_classroom_video, scrape_classroom
    from app.temporal.schemas import (
        ClassroomDownloadInput,
        ClassroomDownloadOutput,
        DownloadVideoInput,
        FailedDownload,
        WorkflowStatus,
    )

# A second browser session would repeat the login and the settle waits
SCRAPE_RETRY = RetryPolicy(maximum_attempts=1)

DOWNLOAD_RETRY = RetryPolicy(
    initial_interval=timedelta(seconds=5),
    backoff_coefficient=2.0,
    maximum_interval=timedelta(minutes=5),
    maximum_attempts=3,
)


@workflow.defn
class ClassroomDownloadWorkflow:
    """Scrape a classroom page and download its videos.

    Usage in a workflow client:
        handle = await client.start_workflow(
            ClassroomDownloadWorkflow.run,
            ClassroomDownloadInput(url="https://www.skool.com/group/classroom/xxxx", cookies_file="cookies.json"),
            id=f"classroom-download-{uuid.uuid4()}",
            task_queue="classroom-download-queue",
        )
        result = await handle.result()
    """

    def __init__(self) -> None:
        self._status = WorkflowStatus.PENDING
        self._total = 0
        self._done = 0

    @workflow.query
    def get_status(self) -> str:
        return self._status.value

    @workflow.query
    def get_progress(self) -> dict[str, int]:
        return {'done': self._done, 'total': self._total}

    @workflow.run
    async def run(self, input_data: ClassroomDownloadInput) -> ClassroomDownloadOutput:
        """Execute the workflow."""
        self._status = WorkflowStatus.RUNNING
        workflow.logger.info(f'Starting classroom download workflow for: {input_data.url}')

        try:
            scraped = await workflow.execute_activity(
                scrape_classroom,
                input_data.to_scrape_input(),
                start_to_close_timeout=timedelta(minutes=5),
                retry_policy=SCRAPE_RETRY,
            )
        except ActivityError:
            self._status = WorkflowStatus.FAILED
            raise

        output = ClassroomDownloadOutput(urls=scraped.urls)
        self._total = len(scraped.urls)

        for url in scraped.urls:
            try:
                await workflow.execute_activity(
                    download_classroom_video,
                    DownloadVideoInput(url=url, output_dir=input_data.output_dir, cookies_file=input_data.cookies_file),
                    start_to_close_timeout=timedelta(hours=1),
                    retry_policy=DOWNLOAD_RETRY,
                )
                output.downloaded.append(url)
            except ActivityError as e:
                cause = e.cause or e
                workflow.logger.warning(f'Download failed for {url}: {cause}')
                output.failed.append(FailedDownload(url=url, error=str(cause)))
            self._done += 1

        self._status = WorkflowStatus.COMPLETED
        workflow.logger.info(f'Workflow complete: {len(output.downloaded)} downloaded, {len(output.failed)} failed')
        return output
