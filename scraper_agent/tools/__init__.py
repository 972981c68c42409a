from scraper_agent.tools.browser_actions import BROWSER_ACTIONS, default_registry
from scraper_agent.tools.registry import Action, ActionRegistry, ActionResult

__all__ = [
    "Action",
    "ActionRegistry",
    "ActionResult",
    "BROWSER_ACTIONS",
    "default_registry",
]
