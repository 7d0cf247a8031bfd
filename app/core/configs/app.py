from typing import Annotated, Literal

from pydantic import BeforeValidator

from app.core.configs.base_config import BaseConfig


class AppConfig(BaseConfig):
    _default_secrets = [
        'CLASSROOM_PASSWORD',
    ]

    ENVIRONMENT: Literal['local', 'staging', 'production', 'testing'] = 'local'
    PROJECT_NAME: str = 'Classroom Downloader'

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_HANDLERS: Annotated[list[Literal['stream', 'file']] | str, BeforeValidator(BaseConfig._parse_list)] = ['stream']

    # Classroom site
    SITE_BASE_URL: str = 'https://www.skool.com/'
    SITE_LOGIN_URL: str = 'https://www.skool.com/login'

    # Default credentials (CLI flags take precedence)
    CLASSROOM_EMAIL: str | None = None
    CLASSROOM_PASSWORD: str | None = None
    CLASSROOM_COOKIES_FILE: str | None = None

    # Browser
    BROWSER_PATH: str | None = None
    BROWSER_HEADLESS: bool = True
    BROWSER_TIMEOUT_SECONDS: float = 180
    BROWSER_WINDOW_WIDTH: int = 1920
    BROWSER_WINDOW_HEIGHT: int = 1080
    BROWSER_USER_AGENT: str = (
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
    )

    # Firefox remote debugging readiness
    FIREFOX_STARTUP_TIMEOUT_SECONDS: float = 30
    FIREFOX_POLL_INTERVAL_SECONDS: float = 0.5
    FIREFOX_REQUEST_TIMEOUT_SECONDS: float = 2

    # Settle waits. The page gives no "render complete" signal, so these are fixed sleeps.
    INITIAL_WAIT_SECONDS: float = 3
    LOGIN_WAIT_SECONDS: float = 3
    LOGIN_BUTTON_WAIT_SECONDS: float = 2
    DEFAULT_PAGE_WAIT_SECONDS: int = 2

    # Element lookups during login
    LOGIN_BUTTON_TIMEOUT_SECONDS: float = 5
    ELEMENT_TIMEOUT_SECONDS: float = 15

    # Downloader
    DOWNLOADER_BINARY: str = 'yt-dlp'
    DEFAULT_OUTPUT_DIR: str = 'downloads'

    # Temporal
    TEMPORAL_HOST: str = 'localhost:7233'
    TEMPORAL_NAMESPACE: str = 'default'
    TEMPORAL_TASK_QUEUE: str = 'classroom-download-queue'


app_config = AppConfig()
