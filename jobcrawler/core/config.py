from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Indeed JP Crawler"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Indeed Japan endpoints
    BASE_URL: str = "https://jp.indeed.com"
    USER_AGENT: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ACCEPT_LANGUAGE: str = "ja-JP,ja;q=0.9,en;q=0.8"

    # Rendering backend: "chrome" (JS rendering) or "static" (plain HTTP)
    RENDERER: str = "chrome"
    HEADLESS: bool = True
    CHROME_VERSION_MAIN: int = 0  # 0 lets undetected-chromedriver detect the installed Chrome
    HUMANIZE: bool = True  # Enable human-like scrolling after each page load

    # Timeouts in seconds
    LISTING_TIMEOUT: float = 60.0
    DETAIL_TIMEOUT: float = 30.0
    WAIT_TIMEOUT: float = 10.0  # Wait for the job selector after navigation

    # Politeness delays in seconds
    SETTLE_DELAY_MIN: float = 2.0  # Let client-side rendering finish
    SETTLE_DELAY_MAX: float = 4.0
    LISTING_DELAY_MIN: float = 5.0  # Between listing pages
    LISTING_DELAY_MAX: float = 8.0
    DETAIL_DELAY_MIN: float = 3.0  # Between detail pages
    DETAIL_DELAY_MAX: float = 6.0

    # Bot-check soft retries
    MAX_RETRIES: int = 2
    BACKOFF_MIN: float = 2.0
    BACKOFF_MAX: float = 8.0

    # Per-run work bounds
    MAX_PAGES: int = 10  # Hard ceiling regardless of what the caller asks for
    MAX_ITEMS_PER_RUN: int = 10

    DEFAULT_SEARCH_QUERY: str = "バックエンドエンジニア"
    DEFAULT_LOCATION: str = "東京都"
    PERSIST_CRAWLED_JOBS: bool = True

    class Config:  # pylint: disable=R0903
        env_file = ".env"
        extra = "ignore"  # Ignore extra fields from .env file


settings = Settings()
