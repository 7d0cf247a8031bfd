"""Page rendering: authentication and markup capture in a live browser session."""

import structlog

from app.core.configs import app_config
from app.core.errors import AccessDeniedError, AuthenticationError, BrowserActionError
from app.core.services.browser.base_service import BrowserSessionInterface
from app.core.services.cookies.schemas import Cookie

logger = structlog.get_logger(__name__)

LOGIN_BUTTON_SELECTOR = 'button[type="button"]:has(span:text-is("Log In"))'
EMAIL_INPUT_SELECTOR = 'input[type="email"], input[name="email"], input[placeholder*="email"]'
PASSWORD_INPUT_SELECTOR = 'input[type="password"], input[name="password"], input[placeholder*="password"]'
SUBMIT_BUTTON_SELECTOR = 'button[type="submit"]:has(span:has-text("Log"))'

LOGIN_SUCCESS_PREDICATE = (
    "!window.location.href.includes('/login')"
    " && !document.body.textContent.includes('Incorrect password')"
    " && !document.body.textContent.includes('No account found for this email.')"
)

# Landing on the public about page means the account cannot see the classroom
PUBLIC_PAGE_MARKER = '/about'

AUTH_TOKEN_COOKIE = 'auth_token'


async def _open_login_form(session: BrowserSessionInterface) -> None:
    await session.navigate(app_config.SITE_BASE_URL)
    await session.sleep(app_config.INITIAL_WAIT_SECONDS)
    logger.info('Landed on site', url=session.current_url())

    try:
        await session.click(LOGIN_BUTTON_SELECTOR, timeout=app_config.LOGIN_BUTTON_TIMEOUT_SECONDS)
        await session.sleep(app_config.LOGIN_BUTTON_WAIT_SECONDS)
    except BrowserActionError:
        logger.warning("Couldn't find login button, navigating to the login page directly")
        await session.navigate(app_config.SITE_LOGIN_URL)
        await session.sleep(app_config.INITIAL_WAIT_SECONDS)

    logger.info('Login page', url=session.current_url())


async def login(session: BrowserSessionInterface, email: str, password: str) -> str:
    """Log in through the site's login form.

    Args:
        session: Connected browser session
        email: Account email
        password: Account password

    Returns:
        URL the browser landed on after logging in

    Raises:
        AuthenticationError: If a step fails or the site rejects the credentials
    """
    logger.info('Attempting login with email and password')

    try:
        await _open_login_form(session)
        await session.fill(EMAIL_INPUT_SELECTOR, email, timeout=app_config.ELEMENT_TIMEOUT_SECONDS)
        await session.fill(PASSWORD_INPUT_SELECTOR, password, timeout=app_config.ELEMENT_TIMEOUT_SECONDS)
        await session.click(SUBMIT_BUTTON_SELECTOR, timeout=app_config.ELEMENT_TIMEOUT_SECONDS)
        await session.sleep(app_config.LOGIN_WAIT_SECONDS)
        logged_in = await session.evaluate(LOGIN_SUCCESS_PREDICATE)
    except BrowserActionError as e:
        raise AuthenticationError(f'login process failed: {e}') from e

    if not logged_in:
        raise AuthenticationError('login failed: invalid credentials or captcha required')

    current_url = session.current_url()
    logger.info('Login successful', url=current_url)
    return current_url


def _log_auth_token(cookies: list[Cookie]) -> None:
    for cookie in cookies:
        if cookie.name == AUTH_TOKEN_COOKIE and 'skool' in cookie.domain:
            token = cookie.value if len(cookie.value) <= 20 else f'{cookie.value[:20]}...'
            logger.info('Auth token found', token=token)


async def prepare_cookie_session(session: BrowserSessionInterface, cookies: list[Cookie]) -> str:
    """Authenticate with cookies and warm the session up on the site root.

    Returns:
        URL the browser landed on
    """
    logger.info('Setting cookies', count=len(cookies))
    _log_auth_token(cookies)

    await session.set_cookies(cookies)
    await session.set_extra_headers(
        {
            'Referer': app_config.SITE_BASE_URL,
            'Accept': 'text/html,application/xhtml+xml,application/xml',
            'Accept-Language': 'en-US,en;q=0.9',
            'Connection': 'keep-alive',
        }
    )
    await session.navigate(app_config.SITE_BASE_URL)
    await session.sleep(app_config.INITIAL_WAIT_SECONDS)

    current_url = session.current_url()
    logger.info('Initial navigation landed', url=current_url)
    return current_url


async def navigate_and_capture(session: BrowserSessionInterface, target_url: str, wait_seconds: float) -> str:
    """Open the classroom page and return its rendered markup.

    The page signals nothing when its client-side rendering is done, so the
    capture happens after a fixed settle time.

    Args:
        session: Authenticated browser session
        target_url: Classroom URL
        wait_seconds: Settle time after navigation

    Returns:
        Full rendered HTML

    Raises:
        AccessDeniedError: If the site redirected to its public page
        BrowserActionError: If navigation or capture fails
    """
    logger.info('Navigating to classroom', url=target_url)
    await session.navigate(target_url)
    await session.sleep(max(wait_seconds, 0))

    current_url = session.current_url()
    logger.info('Landed on', url=current_url)

    if PUBLIC_PAGE_MARKER in current_url:
        raise AccessDeniedError('authentication succeeded but redirected to public page, check URL permissions')

    return await session.content()
