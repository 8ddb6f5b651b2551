class CrawlerError(Exception):
    """Base class for crawler failures."""
    pass


class BrowserUnavailableError(CrawlerError):
    """Raised when the rendering browser cannot be started at all."""
    pass


class RenderError(CrawlerError):
    """Raised when a single page cannot be fetched or rendered."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


class BlockedPageError(RenderError):
    """Raised when Indeed keeps returning a Cloudflare/turnstile block page."""
    pass
