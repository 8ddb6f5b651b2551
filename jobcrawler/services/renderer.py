"""
Page rendering backends.

ChromeRenderer drives one undetected Chrome instance for pages that need
JavaScript; StaticRenderer fetches plain HTML over a retrying requests
session. Both return the page source and raise RenderError subclasses for
page-level failures and BrowserUnavailableError when the backend cannot start.
"""
import logging
import os
import random
import time
from typing import Callable, Dict, Optional

import requests
import undetected_chromedriver as uc
from requests.adapters import HTTPAdapter
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from selenium_stealth import stealth
from urllib3.util.retry import Retry

from jobcrawler.core.config import Settings, settings as default_settings
from jobcrawler.core.exceptions import BlockedPageError, BrowserUnavailableError, RenderError

logger = logging.getLogger(__name__)

# Bot-check interstitial markers
BLOCK_MARKERS = (
    "Checking your browser",
    "Enable JavaScript and cookies to continue",
)
CHALLENGE_MARKERS = ("challenge-platform", "<title>Just a moment")

# Markers of real listing or detail content; a page carrying them is never a block page
CONTENT_MARKERS = (
    'data-jk=',
    'id="mosaic-provider-jobcards"',
    'class="jobsearch-ResultsList"',
    'jobsearch-JobInfoHeader',
    'id="jobDescriptionText"',
)


def is_blocked_page(page_html: str) -> bool:
    """True for a Cloudflare-style block page that carries no job content."""
    if not page_html:
        return False
    has_block_indicators = (
        any(marker in page_html for marker in BLOCK_MARKERS)
        or all(marker in page_html for marker in CHALLENGE_MARKERS)
    )
    has_job_content = any(marker in page_html for marker in CONTENT_MARKERS)
    return has_block_indicators and not has_job_content


def get_chrome_executable_path() -> Optional[str]:
    """
    Get Chrome executable path based on environment.
    Checks CHROME_BIN env var first, then common installation paths.
    """
    chrome_bin = os.environ.get("CHROME_BIN")
    if chrome_bin and os.path.exists(chrome_bin):
        return chrome_bin

    candidates = [
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
        "/usr/bin/chromium-browser",
        "/usr/bin/chromium",
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
        "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
        "C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe",
    ]
    for path in candidates:
        if os.path.exists(path):
            return path

    # Let undetected-chromedriver find it
    return None


def create_session_with_retries() -> requests.Session:
    """Create a requests session with retry logic"""
    session = requests.Session()
    retry = Retry(
        total=3,
        read=3,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 504, 429)
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    return session


class BaseRenderer:
    """Owned handle on a page-rendering resource"""

    name = "base"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    @property
    def is_open(self) -> bool:
        raise NotImplementedError

    def open(self):
        """Acquire the underlying resource. Calling it on an open renderer is a no-op."""
        raise NotImplementedError

    def close(self):
        raise NotImplementedError

    def render(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        wait_selector: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.settings.USER_AGENT,
            "Accept-Language": self.settings.ACCEPT_LANGUAGE,
        }

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


# ============================================================================
# CHROME
# ============================================================================

class ChromeRenderer(BaseRenderer):
    """Undetected Chrome with stealth patches, CDP header profile and soft retries on block pages"""

    name = "chrome"

    def __init__(self, settings: Optional[Settings] = None, sleep: Callable[[float], None] = time.sleep):
        super().__init__(settings)
        self._sleep = sleep
        self._driver = None

    @property
    def is_open(self) -> bool:
        return self._driver is not None

    def open(self):
        if self._driver is not None:
            return
        try:
            self._driver = self._create_driver()
        except Exception as e:
            self._driver = None
            raise BrowserUnavailableError(f"Failed to initialize browser: {e}") from e
        logger.info("✓ WebDriver initialized successfully")

    def close(self):
        """Close the WebDriver when done."""
        if self._driver is None:
            return
        try:
            self._driver.quit()
        except Exception as e:
            logger.warning(f"Error closing WebDriver: {e}")
        finally:
            self._driver = None
        logger.info("WebDriver closed")

    def _create_driver(self):
        options = uc.ChromeOptions()
        if self.settings.HEADLESS:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument(f"user-agent={self.settings.USER_AGENT}")
        options.add_argument("--window-size=1920,1080")
        options.add_argument("--disable-blink-features=AutomationControlled")
        lang_hint = self.settings.ACCEPT_LANGUAGE.split(",")[0]
        if lang_hint:
            options.add_argument(f"--lang={lang_hint}")

        driver = uc.Chrome(
            options=options,
            browser_executable_path=get_chrome_executable_path(),
            use_subprocess=True,
            version_main=self.settings.CHROME_VERSION_MAIN or None,
        )

        # Hide webdriver property
        driver.execute_script("Object.defineProperty(navigator, 'webdriver', {get: () => undefined})")
        driver.execute_cdp_cmd('Network.setUserAgentOverride', {
            "userAgent": self.settings.USER_AGENT,
            "acceptLanguage": self.settings.ACCEPT_LANGUAGE,
        })
        driver.execute_cdp_cmd('Network.setExtraHTTPHeaders', {
            "headers": {"Accept-Language": self.settings.ACCEPT_LANGUAGE}
        })

        languages = [lang.split(";")[0].strip() for lang in self.settings.ACCEPT_LANGUAGE.split(",") if lang]
        stealth(
            driver,
            languages=languages or ["ja-JP", "ja"],
            vendor="Google Inc.",
            platform="MacIntel",
            webgl_vendor="Intel Inc.",
            renderer="Intel Iris OpenGL Engine",
            fix_hairline=True,
        )

        # Random viewport size to appear more human
        driver.set_window_size(random.randint(1366, 1920), random.randint(768, 1080))
        return driver

    def render(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        wait_selector: Optional[str] = None,
    ) -> str:
        self.open()
        driver = self._driver
        timeout = timeout or self.settings.DETAIL_TIMEOUT

        try:
            driver.set_page_load_timeout(timeout)
            if headers:
                merged = {"Accept-Language": self.settings.ACCEPT_LANGUAGE, **headers}
                driver.execute_cdp_cmd('Network.setExtraHTTPHeaders', {"headers": merged})
        except WebDriverException as e:
            raise RenderError(url, f"browser session unusable: {e.msg}") from e

        retries = 0
        while True:
            try:
                driver.get(url)
                page_html = driver.page_source or ""
            except TimeoutException as e:
                raise RenderError(url, f"page load timed out after {timeout:.0f}s") from e
            except WebDriverException as e:
                raise RenderError(url, f"navigation failed: {e.msg}") from e

            if not is_blocked_page(page_html):
                break
            if retries >= self.settings.MAX_RETRIES:
                raise BlockedPageError(url, "blocked by bot check")

            backoff = random.uniform(self.settings.BACKOFF_MIN, self.settings.BACKOFF_MAX) * (1 + 0.5 * retries)
            logger.warning(f"Bot check detected, retry {retries + 1}/{self.settings.MAX_RETRIES}, waiting {backoff:.1f}s...")
            try:
                driver.delete_all_cookies()
            except WebDriverException as e:
                logger.debug(f"Could not clear cookies: {e.msg}")
            self._sleep(backoff)
            retries += 1

        self._sleep(random.uniform(self.settings.SETTLE_DELAY_MIN, self.settings.SETTLE_DELAY_MAX))

        if wait_selector:
            try:
                WebDriverWait(driver, self.settings.WAIT_TIMEOUT).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, wait_selector))
                )
            except TimeoutException:
                logger.info(f"Waited {self.settings.WAIT_TIMEOUT:.0f}s for '{wait_selector}' (may not have loaded)")
            else:
                if self.settings.HUMANIZE:
                    self._progressive_scroll()

        try:
            return driver.page_source or ""
        except WebDriverException as e:
            raise RenderError(url, f"could not read page source: {e.msg}") from e

    def _progressive_scroll(self):
        """Gradually scroll the page to trigger lazy-loaded elements."""
        try:
            total = self._driver.execute_script("return document.body.scrollHeight") or 2000
            steps = random.randint(4, 7)
            for i in range(steps):
                y = int(total * (i + 1) / steps)
                self._driver.execute_script("window.scrollTo(0, arguments[0]);", y)
                self._sleep(random.uniform(0.25, 0.7))
        except WebDriverException as e:
            logger.debug(f"Scroll interrupted: {e.msg}")


# ============================================================================
# STATIC
# ============================================================================

class StaticRenderer(BaseRenderer):
    """Plain HTTP fetch for pages whose content is in the initial HTML"""

    name = "static"

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        super().__init__(settings)
        self._session = session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def open(self):
        if self._session is None:
            self._session = create_session_with_retries()

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None

    def render(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        wait_selector: Optional[str] = None,
    ) -> str:
        self.open()
        request_headers = {**self.default_headers(), **(headers or {})}
        try:
            response = self._session.get(url, headers=request_headers, timeout=timeout or self.settings.DETAIL_TIMEOUT)
        except requests.RequestException as e:
            raise RenderError(url, f"request failed: {e}") from e

        if response.status_code != 200:
            raise RenderError(url, f"request failed with status {response.status_code}")

        page_html = response.text or ""
        if is_blocked_page(page_html):
            raise BlockedPageError(url, "blocked by bot check")
        return page_html


def create_renderer(settings: Optional[Settings] = None) -> BaseRenderer:
    settings = settings or default_settings
    kind = settings.RENDERER.lower()
    if kind == ChromeRenderer.name:
        return ChromeRenderer(settings)
    if kind == StaticRenderer.name:
        return StaticRenderer(settings)
    raise ValueError(f"Unknown renderer: {settings.RENDERER}")
