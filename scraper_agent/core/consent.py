"""Cookie consent dismissal, run after navigation when enabled."""
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

LOGGER = logging.getLogger(__name__)

CONSENT_SELECTORS = [
    "button:has-text('Accept all')",
    "button:has-text('Accept All')",
    "button:has-text('Accept')",
    "button:has-text('I agree')",
    "button:has-text('Agree')",
    "button:has-text('Allow all')",
    "button:has-text('Allow All')",
    "button:has-text('Got it')",
    "button:has-text('Reject all')",
    "button:has-text('Reject All')",
    "[aria-label*='accept' i]",
    "[aria-label*='agree' i]",
    "[id*='accept' i]",
    "[data-testid*='accept' i]",
]


async def _click_first_visible(scope, timeout_ms: int) -> bool:
    for sel in CONSENT_SELECTORS:
        try:
            loc = scope.locator(sel).first
            if await loc.is_visible(timeout=timeout_ms):
                await loc.click(timeout=2000)
                LOGGER.debug("consent dismissed via %s", sel)
                return True
        except PlaywrightError:
            continue
    return False


async def dismiss_cookie_consent(page: Page, timeout_ms: int = 350) -> bool:
    """Try consent in main doc, then iframes. Returns True if clicked."""
    if await _click_first_visible(page, timeout_ms):
        await page.wait_for_timeout(350)
        return True
    for frame in page.frames:
        if frame == page.main_frame:
            continue
        if await _click_first_visible(frame, timeout_ms):
            await page.wait_for_timeout(350)
            return True
    return False
