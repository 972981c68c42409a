from scraper_agent.core.browser import BrowserSession
from scraper_agent.core.consent import dismiss_cookie_consent

__all__ = [
    "BrowserSession",
    "dismiss_cookie_consent",
]
