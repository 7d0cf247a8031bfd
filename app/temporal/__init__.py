"""Temporal workflow orchestration for classroom downloads.

This package contains:
- activities: Individual tasks (scraping a classroom, downloading a video)
- workflows: Orchestration logic (scrape, then download each video)
- worker: Worker process that executes workflows
- client: Client for starting workflows
- schemas: Shared data types

Nothing is imported here: the workflow sandbox re-imports parent packages,
and the service layer reads settings at import time.

Quick Start:
    # Start Temporal (dev mode)
    temporal server start-dev

    # Start the worker
    python -m app.temporal.worker

    # Submit a classroom
    python scripts/download_classroom.py --url <classroom-url> --cookies cookies.json --workflow
"""
