"""Action registry: name -> schema-checked browser action, dispatched against one page."""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from playwright.async_api import Page

from scraper_agent.config import AgentSettings
from scraper_agent.errors import ActionParameterError, ActionSchemaError, UnknownActionError

LOGGER = logging.getLogger(__name__)

ActionResult = Dict[str, Any]
ActionHandler = Callable[[Page, Dict[str, Any], AgentSettings], Awaitable[ActionResult]]


def _empty_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class Action:
    """One named browser operation with its JSON parameter schema."""

    name: str
    description: str
    handler: ActionHandler
    parameters: Dict[str, Any] = field(default_factory=_empty_schema)

    @property
    def required(self) -> List[str]:
        return list(self.parameters.get("required", []))

    def tool_schema(self) -> Dict[str, Any]:
        """Anthropic tool definition for this action."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


def validate_action(action: Action) -> None:
    if not action.name or not action.name.strip():
        raise ActionSchemaError("action name must not be empty")
    schema = action.parameters
    if not isinstance(schema, Mapping) or schema.get("type") != "object":
        raise ActionSchemaError(f"{action.name}: parameter schema must be an object schema")
    properties = schema.get("properties", {})
    if not isinstance(properties, Mapping):
        raise ActionSchemaError(f"{action.name}: 'properties' must be a mapping")
    undeclared = [key for key in schema.get("required", []) if key not in properties]
    if undeclared:
        raise ActionSchemaError(
            f"{action.name}: required parameter(s) not declared: {', '.join(undeclared)}"
        )
    if not callable(action.handler):
        raise ActionSchemaError(f"{action.name}: handler is not callable")


class ActionRegistry:
    """Registry for browser actions; dispatch is an O(1) lookup by name."""

    def __init__(self, settings: Optional[AgentSettings] = None):
        self.settings = settings or AgentSettings()
        self._actions: Dict[str, Action] = {}

    def register(self, action: Action) -> None:
        validate_action(action)
        if action.name in self._actions:
            raise ActionSchemaError(f"action already registered: {action.name}")
        self._actions[action.name] = action

    def register_many(self, actions) -> None:
        for action in actions:
            self.register(action)

    def get(self, name: str) -> Optional[Action]:
        return self._actions.get(name)

    def has(self, name: str) -> bool:
        return name in self._actions

    @property
    def names(self) -> List[str]:
        return list(self._actions)

    def tool_schemas(self) -> List[Dict[str, Any]]:
        return [action.tool_schema() for action in self._actions.values()]

    async def dispatch(self, page: Page, name: str, params: Mapping) -> ActionResult:
        """
        Run one action against the page.

        Raises UnknownActionError / ActionParameterError when the action cannot
        be attempted. An action that runs and fails reports success=False in
        its result instead of raising.
        """
        action = self._actions.get(name)
        if action is None:
            raise UnknownActionError(name)
        args = dict(params) if isinstance(params, Mapping) else {}
        missing = [key for key in action.required if key not in args]
        if missing:
            raise ActionParameterError(name, missing)
        LOGGER.debug("dispatching %s with %s", name, args)
        return await action.handler(page, args, self.settings)
