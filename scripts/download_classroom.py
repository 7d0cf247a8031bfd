#!/usr/bin/env python3
"""Download every video embedded in a skool.com classroom page.

The page is rendered in a real browser (Chromium-based or Firefox) so the
classroom's client-side data is available, the Loom and YouTube links are
extracted from it and each one is handed to yt-dlp.

Usage:
    python scripts/download_classroom.py --url <classroom_url> (--cookies <file> | --email <email> --password <pass>)

Examples:
    python scripts/download_classroom.py --url "https://www.skool.com/group/classroom/xxxx" --cookies cookies.json
    python scripts/download_classroom.py --url "https://www.skool.com/group/classroom/xxxx" \\
        --email user@example.com --password secret --no-headless --browser firefox
    python scripts/download_classroom.py --url "https://www.skool.com/group/classroom/xxxx" --cookies cookies.txt --workflow

Browsers are auto-detected in this order:
    Windows : Edge > Chrome > Chromium > Brave > Firefox
    macOS   : Chrome > Chromium > Edge > Brave > Arc > Firefox
    Linux   : chromium-browser, chromium, google-chrome, ..., firefox
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.configs import app_config  # noqa: E402


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'{value!r} is not a whole number') from e
    if number < 0:
        raise argparse.ArgumentTypeError(f'{value} must be zero or more')
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Download classroom videos from skool.com',
        epilog='Either --cookies or --email with --password is required.',
    )
    parser.add_argument('--url', help='URL of the skool.com classroom to scrape (required)')
    parser.add_argument(
        '--cookies',
        default=app_config.CLASSROOM_COOKIES_FILE,
        help='Path to cookies file (JSON or Netscape .txt)',
    )
    parser.add_argument(
        '--email',
        default=app_config.CLASSROOM_EMAIL,
        help='Email for Skool login (alternative to cookies)',
    )
    parser.add_argument(
        '--password',
        default=app_config.CLASSROOM_PASSWORD,
        help='Password for Skool login (required with --email)',
    )
    parser.add_argument('--output', default=app_config.DEFAULT_OUTPUT_DIR, help='Directory to save downloaded videos')
    parser.add_argument(
        '--wait',
        type=non_negative_int,
        default=app_config.DEFAULT_PAGE_WAIT_SECONDS,
        help='Seconds to wait for the classroom page to load',
    )
    parser.add_argument(
        '--headless',
        action=argparse.BooleanOptionalAction,
        default=app_config.BROWSER_HEADLESS,
        help='Run the browser without a window',
    )
    parser.add_argument(
        '--browser',
        default=app_config.BROWSER_PATH,
        help='Path or command of browser to use (auto-detected if not set)',
    )
    parser.add_argument(
        '--workflow',
        action='store_true',
        help='Submit the job to the Temporal worker instead of running it here',
    )
    return parser


async def run_locally(request, output_dir: Path) -> int:
    from app.core.services.classroom import get_classroom_service

    service = get_classroom_service()

    print('\n⏳ Scraping classroom and downloading videos...')
    report = await service.extract_and_download(request, output_dir)
    if not report.urls:
        print('\n⚠️  No videos found on the page\n')
        return 0

    print(f'\n🎬 Found {len(report.urls)} video(s):')
    for index, result in enumerate(report.results, start=1):
        if result.success:
            print(f'✅ [{index}/{len(report.urls)}] {result.url}')
        else:
            print(f'❌ [{index}/{len(report.urls)}] {result.url}: {result.error}', file=sys.stderr)

    print(f'\n✅ Download process completed: {len(report.succeeded)} succeeded, {len(report.failed)} failed')
    print(f'   Output: {output_dir}\n')
    return 0


async def run_workflow(request, output_dir: Path) -> int:
    from temporalio.client import WorkflowFailureError

    from app.temporal.client import start_workflow
    from app.temporal.schemas import ClassroomDownloadInput
    from app.temporal.workflows import ClassroomDownloadWorkflow

    workflow_input = ClassroomDownloadInput(
        **request.model_dump(exclude={'email', 'password'}),
        output_dir=str(output_dir),
    )
    handle = await start_workflow(ClassroomDownloadWorkflow.run, workflow_input)

    print(f'\n🚀 Workflow started: {handle.id}')
    print('⏳ Waiting for the worker...')

    try:
        result = await handle.result()
    except WorkflowFailureError as e:
        print(f'\n❌ Workflow failed: {e.cause or e}\n', file=sys.stderr)
        return 1

    print(f'\n🎬 Found {len(result.urls)} video(s)')
    for url in result.downloaded:
        print(f'✅ {url}')
    for failure in result.failed:
        print(f'❌ {failure.url}: {failure.error}', file=sys.stderr)
    print(f'   Output: {output_dir}\n')
    return 0


async def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.url:
        parser.print_help()
        return 1

    using_login = bool(args.email and args.password)
    if not using_login and not args.cookies:
        print('Error: You must provide either cookies file or email+password for authentication', file=sys.stderr)
        return 1

    # Workflow inputs are stored in the Temporal history
    if args.workflow and not args.cookies:
        print('Error: --workflow authenticates with a cookies file only; pass --cookies', file=sys.stderr)
        return 1
    if args.workflow:
        using_login = False

    from pydantic import ValidationError

    from app.core.errors import ClassroomError
    from app.core.services.classroom import ScrapeRequest
    from app.core.services.log import get_log_service

    get_log_service()

    try:
        request = ScrapeRequest(
            url=args.url,
            email=args.email if using_login else None,
            password=args.password if using_login else None,
            cookies_file=args.cookies,
            wait_seconds=args.wait,
            headless=args.headless,
            browser_path=args.browser,
        )
    except ValidationError as e:
        parser.print_usage(sys.stderr)
        print(f'Error: {e}', file=sys.stderr)
        return 1

    output_dir = Path(args.output)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f'\n❌ Error creating output directory: {e}\n', file=sys.stderr)
        return 1

    print('\n🚀 Starting classroom download...')
    print(f'   URL: {args.url}')
    print(f'   Auth: {"email and password" if using_login else f"cookies from {args.cookies}"}')

    try:
        if args.workflow:
            return await run_workflow(request, output_dir)
        return await run_locally(request, output_dir)
    except ClassroomError as e:
        print(f'\n❌ Error: {e}\n', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(asyncio.run(main()))
