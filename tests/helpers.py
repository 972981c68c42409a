"""Fakes shared by the scraper agent tests."""
from typing import Any, Dict, List, Optional

from langchain_core.messages import AIMessage

from scraper_agent.agent.channel import ActionRequest, Reply
from scraper_agent.transcript import NullTranscript


def ai_message(text: str = "", *calls: Dict[str, Any]) -> AIMessage:
    """AIMessage with tool calls given as {"name", "args", "id"} dicts."""
    return AIMessage(
        content=text,
        tool_calls=[{**call, "type": "tool_call"} for call in calls],
    )


def request(name: Optional[str], call_id: Optional[str] = None, **params: Any) -> ActionRequest:
    return ActionRequest(name=name, parameters=params, call_id=call_id)


class FakeChatModel:
    """Stands in for ChatAnthropic: records every call and answers from a script."""

    def __init__(self, responses: List[AIMessage], error: Optional[Exception] = None):
        self.responses = list(responses)
        self.error = error
        self.calls: List[List[Any]] = []
        self.bound_tools: Optional[List[Dict[str, Any]]] = None
        self.bind_kwargs: Dict[str, Any] = {}

    def bind_tools(self, tools, **kwargs):
        self.bound_tools = list(tools)
        self.bind_kwargs = kwargs
        return self

    async def ainvoke(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        if not self.responses:
            return AIMessage(content="(script exhausted)")
        return self.responses.pop(0)


class ScriptedChannel:
    """Conversation channel double that replays Reply objects and records what was sent."""

    def __init__(self, replies: List[Reply], repeat_last: bool = False):
        self.replies = list(replies)
        self.repeat_last = repeat_last
        self.sent: List[Any] = []
        self.system_instruction = ""

    async def send(self, message) -> Reply:
        self.sent.append(message)
        if len(self.replies) == 1 and self.repeat_last:
            return self.replies[0]
        if not self.replies:
            return Reply(text="(script exhausted)")
        return self.replies.pop(0)


class RecordingTranscript(NullTranscript):
    def __init__(self):
        self.events: List[tuple] = []

    def task_started(self, task):
        self.events.append(("task_started", task))

    def agent_response(self, text):
        self.events.append(("agent_response", text))

    def function_call(self, name, params):
        self.events.append(("function_call", name, params))

    def function_result(self, name, result):
        self.events.append(("function_result", name, result))

    def error(self, message):
        self.events.append(("error", message))

    def system(self, message):
        self.events.append(("system", message))

    def task_completed(self, attempts_used, max_attempts):
        self.events.append(("task_completed", attempts_used, max_attempts))

    def of(self, kind: str) -> List[tuple]:
        return [event for event in self.events if event[0] == kind]


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    async def fill(self, text: str) -> None:
        self.page.record("fill", self.selector, text)
        if self.selector in self.page.broken:
            raise RuntimeError(f"no element for {self.selector}")
        self.page.values[self.selector] = text

    async def is_visible(self, timeout: Optional[int] = None) -> bool:
        self.page.record("is_visible", self.selector, timeout)
        if self.selector in self.page.broken:
            raise RuntimeError(f"invalid selector {self.selector}")
        return self.selector in self.page.visible

    async def click(self, timeout: Optional[int] = None) -> None:
        self.page.record("locator_click", self.selector, timeout)


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page

    async def press(self, key: str) -> None:
        self.page.record("press", key)
        if key in self.page.broken:
            raise RuntimeError(f"unknown key {key}")


class FakePage:
    """Async stand-in for a Playwright Page with just the calls the actions use."""

    def __init__(self, html: str = "<html><body>hi</body></html>", url: str = "about:blank"):
        self.html = html
        self.url = url
        self.calls: List[tuple] = []
        self.values: Dict[str, str] = {}
        self.visible = set()
        self.broken = set()
        self.idle_fails = False
        self.frames = []
        self.main_frame = None
        self.keyboard = FakeKeyboard(self)

    def record(self, *call) -> None:
        self.calls.append(call)

    def called(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def goto(self, url: str) -> None:
        self.record("goto", url)
        if url in self.broken:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self.url = url

    async def wait_for_load_state(self, state: str, timeout: Optional[int] = None) -> None:
        self.record("wait_for_load_state", state, timeout)
        if self.idle_fails:
            raise TimeoutError("networkidle not reached")

    async def wait_for_timeout(self, timeout: int) -> None:
        self.record("wait_for_timeout", timeout)

    async def content(self) -> str:
        return self.html

    async def click(self, selector: str, timeout: Optional[int] = None) -> None:
        self.record("click", selector, timeout)
        if selector in self.broken:
            raise RuntimeError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def screenshot(self, path: str) -> None:
        self.record("screenshot", path)
        if path in self.broken:
            raise OSError(f"cannot write {path}")
