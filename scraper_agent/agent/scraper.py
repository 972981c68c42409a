"""ScraperAgent: one browser page + one conversation, running natural-language tasks."""
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Page

from scraper_agent.agent.channel import ConversationChannel
from scraper_agent.agent.loop import LoopState, SessionContext, TaskLoop, validate_max_attempts
from scraper_agent.config import AgentSettings
from scraper_agent.core.browser import BrowserSession
from scraper_agent.errors import ConversationError
from scraper_agent.prompts import STATUS_PROMPT
from scraper_agent.tools.browser_actions import default_registry
from scraper_agent.tools.registry import ActionRegistry
from scraper_agent.transcript import MarkdownTranscript


@dataclass
class StatusReport:
    success: bool
    error: Optional[str] = None


class ScraperAgent:
    """
    Execute tasks against an injected page or a browser the agent starts itself.

    The conversation is kept across do_task calls, so a follow-up task sees
    the history of the previous ones.
    """

    def __init__(
        self,
        settings: Optional[AgentSettings] = None,
        page: Optional[Page] = None,
        channel: Optional[ConversationChannel] = None,
        registry: Optional[ActionRegistry] = None,
        transcript=None,
    ):
        self.settings = settings or AgentSettings.from_env()
        self.registry = registry or default_registry(self.settings)
        self.channel = channel or ConversationChannel(
            tools=self.registry.tool_schemas(),
            settings=self.settings,
        )
        self.transcript = transcript or MarkdownTranscript(self.settings.transcript_path)
        self.max_attempts = validate_max_attempts(self.settings.max_attempts)
        self.page = page
        self._browser: Optional[BrowserSession] = None
        self.last_state: Optional[LoopState] = None

    async def __aenter__(self) -> "ScraperAgent":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def _ensure_page(self) -> Page:
        if self.page is None:
            self._browser = BrowserSession(
                headless=self.settings.headless,
                slow_mo_ms=self.settings.slow_mo_ms,
            )
            self.page = await self._browser.start()
        return self.page

    async def do_task(self, task: str) -> str:
        page = await self._ensure_page()
        loop = TaskLoop(
            SessionContext(page=page, channel=self.channel),
            self.registry,
            transcript=self.transcript,
            max_attempts=self.max_attempts,
        )
        try:
            return await loop.run(task)
        finally:
            self.last_state = loop.state

    async def check_status(self) -> StatusReport:
        data = await self.channel.ask_json(STATUS_PROMPT)
        success = data.get("success")
        if not isinstance(success, bool):
            raise ConversationError("Failed to check status: 'success' missing from the reply")
        error = data.get("error")
        return StatusReport(success=success, error=error if isinstance(error, str) and error else None)

    def set_max_attempts(self, max_attempts: int) -> None:
        self.max_attempts = validate_max_attempts(max_attempts)

    def override_page(self, page: Page) -> None:
        self.page = page

    def override_system_instruction(self, system_instruction: str) -> None:
        self.channel.system_instruction = system_instruction

    async def cleanup(self) -> None:
        """Close the browser if this agent launched it; injected pages are left open."""
        if self._browser is not None:
            owned_page = self._browser.page
            await self._browser.close()
            if self.page is owned_page:
                self.page = None
            self._browser = None
