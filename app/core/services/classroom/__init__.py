"""Classroom video extraction service.

This service handles rendering an authenticated classroom page, extracting
its embedded video links and downloading each video with yt-dlp.
"""

from app.core.services.classroom.downloader import VideoDownloader, get_video_downloader
from app.core.services.classroom.extractor import (
    extract_from_page_state,
    extract_page_state,
    extract_video_urls,
    extract_with_patterns,
    normalize_loom_url,
    normalize_youtube_url,
)
from app.core.services.classroom.schemas import DownloadReport, DownloadResult, ScrapeRequest
from app.core.services.classroom.service import ClassroomExtractionService, get_classroom_service

__all__ = [
    'ClassroomExtractionService',
    'DownloadReport',
    'DownloadResult',
    'ScrapeRequest',
    'VideoDownloader',
    'extract_from_page_state',
    'extract_page_state',
    'extract_video_urls',
    'extract_with_patterns',
    'get_classroom_service',
    'get_video_downloader',
    'normalize_loom_url',
    'normalize_youtube_url',
]
