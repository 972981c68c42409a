"""Exceptions raised by the scraper agent."""


class ScraperAgentError(Exception):
    """Base class for all scraper agent errors."""


class BrowserSessionError(ScraperAgentError):
    """No browser page could be obtained; the task cannot run."""


class ActionError(ScraperAgentError):
    """An action could not be dispatched at all."""


class UnknownActionError(ActionError):
    def __init__(self, name: str):
        super().__init__(f"Unknown action: {name}")
        self.name = name


class ActionParameterError(ActionError):
    def __init__(self, name: str, missing):
        super().__init__(f"Action {name} is missing required parameter(s): {', '.join(missing)}")
        self.name = name
        self.missing = list(missing)


class ActionSchemaError(ActionError):
    """An action was registered with an invalid parameter schema."""


class ConversationError(ScraperAgentError):
    """The model reply could not be used."""
