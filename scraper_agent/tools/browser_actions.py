"""The browser actions offered to the model: navigate, click, type, checkSelector, getContent, getCurrentUrl, screenshot, keyPress."""
from typing import Any, Dict, Optional

from playwright.async_api import Page

from scraper_agent.config import AgentSettings
from scraper_agent.core.consent import dismiss_cookie_consent
from scraper_agent.tools.registry import Action, ActionRegistry, ActionResult


def _error(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


def _object_schema(**properties: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": "string", "description": desc} for name, desc in properties.items()},
        "required": list(properties),
    }


async def wait_for_network_idle(page: Page, timeout_ms: int) -> None:
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout_ms)
    except Exception:
        await page.wait_for_timeout(timeout_ms)


async def navigate(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        await page.goto(params["url"])
        await wait_for_network_idle(page, settings.network_idle_timeout_ms)
        if settings.dismiss_consent:
            await dismiss_cookie_consent(page)
        return {"success": True, "content": await page.content() or ""}
    except Exception as e:
        return {"success": False, "content": "", "error": _error(e)}


async def click(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        await page.click(params["selector"], timeout=settings.click_timeout_ms)
        return {"success": True}
    except Exception as e:
        return {"success": False, "error": _error(e)}


async def type_text(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        await page.locator(params["selector"]).fill(params["text"])
        return {"success": True}
    except Exception as e:
        return {"success": False, "error": _error(e)}


async def check_selector(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        is_visible = await page.locator(params["selector"]).is_visible(
            timeout=settings.visibility_timeout_ms
        )
        return {"success": True, "isVisible": is_visible}
    except Exception as e:
        return {"success": False, "isVisible": False, "error": _error(e)}


async def get_content(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        return {"success": True, "content": await page.content() or ""}
    except Exception as e:
        return {"success": False, "content": "", "error": _error(e)}


async def get_current_url(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        return {"success": True, "url": page.url}
    except Exception as e:
        return {"success": False, "url": "", "error": _error(e)}


async def screenshot(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        await page.screenshot(path=params["path"])
        return {"success": True}
    except Exception:
        return {"success": False}


async def key_press(page: Page, params: Dict[str, Any], settings: AgentSettings) -> ActionResult:
    try:
        await page.keyboard.press(params["key"])
        return {"success": True}
    except Exception as e:
        return {"success": False, "error": _error(e)}


BROWSER_ACTIONS = [
    Action(
        name="navigate",
        description="Navigate to a webpage and return its HTML once the network is idle",
        handler=navigate,
        parameters=_object_schema(url="Absolute URL to open"),
    ),
    Action(
        name="click",
        description="Click an element on the page using CSS selector",
        handler=click,
        parameters=_object_schema(selector="Unique CSS selector of the element"),
    ),
    Action(
        name="type",
        description="Type text into an input field",
        handler=type_text,
        parameters=_object_schema(
            selector="Unique CSS selector of the input",
            text="Text to fill in",
        ),
    ),
    Action(
        name="checkSelector",
        description="Check if a selector is valid and visible on the page",
        handler=check_selector,
        parameters=_object_schema(selector="CSS selector to check"),
    ),
    Action(
        name="getContent",
        description="Get the HTML of the current page",
        handler=get_content,
    ),
    Action(
        name="getCurrentUrl",
        description="Get the current URL of the page",
        handler=get_current_url,
    ),
    Action(
        name="screenshot",
        description="Take a screenshot of the current page",
        handler=screenshot,
        parameters=_object_schema(path="File path for the PNG"),
    ),
    Action(
        name="keyPress",
        description="Press a keyboard key (e.g., 'Enter', 'Tab', 'Escape', 'ArrowDown', etc.)",
        handler=key_press,
        parameters=_object_schema(key="Key name as understood by Playwright"),
    ),
]


def default_registry(settings: Optional[AgentSettings] = None) -> ActionRegistry:
    registry = ActionRegistry(settings)
    registry.register_many(BROWSER_ACTIONS)
    return registry
