"""Tests for Temporal workflows.

These tests use Temporal's testing framework which runs workflows
in-memory WITHOUT needing a Temporal server. Activities are replaced by
stand-ins registered under the same names.

Run tests:
    pytest tests/temporal/test_workflows.py -v
"""

import pytest
from pydantic import ValidationError
from temporalio import activity
from temporalio.client import WorkflowFailureError
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.exceptions import ApplicationError
from temporalio.testing import WorkflowEnvironment
from temporalio.worker import Worker

from app.temporal.schemas import (
    ClassroomDownloadInput,
    DownloadVideoInput,
    DownloadVideoOutput,
    ScrapeClassroomInput,
    ScrapeClassroomOutput,
    WorkflowStatus,
)
from app.temporal.workflows import ClassroomDownloadWorkflow

CLASSROOM_URL = 'https://www.skool.com/group/classroom/abc'
VIDEO_URLS = [
    'https://www.loom.com/share/one',
    'https://www.loom.com/share/broken',
    'https://www.youtube.com/watch?v=aaaaaaaaaaa',
]

downloaded: list[str] = []
scraped: list[ScrapeClassroomInput] = []

# =============================================================================
# Activity stand-ins
# =============================================================================


@activity.defn(name='scrape_classroom')
async def fake_scrape_classroom(input_data: ScrapeClassroomInput) -> ScrapeClassroomOutput:
    scraped.append(input_data)
    if 'denied' in input_data.url:
        raise ApplicationError('redirected to public page', type='AccessDeniedError', non_retryable=True)
    return ScrapeClassroomOutput(urls=VIDEO_URLS)


@activity.defn(name='download_classroom_video')
async def fake_download_classroom_video(input_data: DownloadVideoInput) -> DownloadVideoOutput:
    downloaded.append(input_data.url)
    if 'broken' in input_data.url:
        raise ApplicationError('yt-dlp failed with code 1', type='DownloadError', non_retryable=True)
    return DownloadVideoOutput(url=input_data.url, output_dir=input_data.output_dir)


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
async def workflow_environment():
    """Create a test workflow environment.

    This runs Temporal in-memory - no server needed!
    """
    async with await WorkflowEnvironment.start_time_skipping(data_converter=pydantic_data_converter) as env:
        yield env


@pytest.fixture
async def worker(workflow_environment):
    """Create a worker with the classroom workflow and stand-in activities."""
    downloaded.clear()
    scraped.clear()
    async with Worker(
        workflow_environment.client,
        task_queue='test-queue',
        workflows=[ClassroomDownloadWorkflow],
        activities=[fake_scrape_classroom, fake_download_classroom_video],
    ):
        yield workflow_environment


# =============================================================================
# Tests
# =============================================================================


class TestClassroomDownloadWorkflow:
    """Tests for the ClassroomDownloadWorkflow."""

    async def test_failed_download_does_not_stop_the_rest(self, worker):
        result = await worker.client.execute_workflow(
            ClassroomDownloadWorkflow.run,
            ClassroomDownloadInput(url=CLASSROOM_URL, cookies_file='cookies.json', output_dir='videos'),
            id='test-classroom-download-1',
            task_queue='test-queue',
        )

        assert result.urls == VIDEO_URLS
        assert result.downloaded == [VIDEO_URLS[0], VIDEO_URLS[2]]
        assert [failure.url for failure in result.failed] == [VIDEO_URLS[1]]
        assert 'code 1' in result.failed[0].error
        assert downloaded == VIDEO_URLS

    async def test_scrape_failure_fails_workflow(self, worker):
        with pytest.raises(WorkflowFailureError):
            await worker.client.execute_workflow(
                ClassroomDownloadWorkflow.run,
                ClassroomDownloadInput(url=f'{CLASSROOM_URL}/denied', cookies_file='cookies.json'),
                id='test-classroom-download-2',
                task_queue='test-queue',
            )

        assert downloaded == []

    async def test_query_status(self, worker):
        handle = await worker.client.start_workflow(
            ClassroomDownloadWorkflow.run,
            ClassroomDownloadInput(url=CLASSROOM_URL, cookies_file='cookies.txt', wait_seconds=3),
            id='test-classroom-download-3',
            task_queue='test-queue',
        )
        await handle.result()

        assert await handle.query(ClassroomDownloadWorkflow.get_status) == WorkflowStatus.COMPLETED.value
        assert await handle.query(ClassroomDownloadWorkflow.get_progress) == {'done': 3, 'total': 3}

        [scrape_input] = scraped
        assert scrape_input.cookies_file == 'cookies.txt'
        assert scrape_input.wait_seconds == 3
        assert scrape_input.email is None
        assert scrape_input.password is None


class TestClassroomDownloadInput:
    """Tests for what the workflow input may carry into the history."""

    def test_has_no_credential_fields(self):
        assert 'email' not in ClassroomDownloadInput.model_fields
        assert 'password' not in ClassroomDownloadInput.model_fields

    def test_rejects_credentials(self):
        with pytest.raises(ValidationError, match='password'):
            ClassroomDownloadInput(url=CLASSROOM_URL, cookies_file='cookies.json', password='secret')

    def test_requires_cookies_file(self):
        with pytest.raises(ValidationError, match='cookies_file'):
            ClassroomDownloadInput(url=CLASSROOM_URL)

    def test_serialized_input_holds_no_password(self):
        payload = ClassroomDownloadInput(url=CLASSROOM_URL, cookies_file='cookies.json').model_dump_json()
        assert 'password' not in payload
