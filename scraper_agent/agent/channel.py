"""Conversation channel: stateful Claude chat with the browser actions bound as tools."""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage

from scraper_agent import config
from scraper_agent.config import AgentSettings
from scraper_agent.errors import ConversationError
from scraper_agent.prompts import SYSTEM_INSTRUCTION

LOGGER = logging.getLogger(__name__)

UNANSWERED_CALL_RESULT = {"success": False, "error": "No result was recorded for this call."}


@dataclass(frozen=True)
class ActionRequest:
    """One action the model asked for. name/parameters are None when the call was malformed."""

    name: Optional[str]
    parameters: Optional[Dict[str, Any]]
    call_id: Optional[str] = None


@dataclass(frozen=True)
class FunctionResult:
    name: str
    response: Any
    call_id: Optional[str] = None


Message = Union[str, FunctionResult]


@dataclass
class Reply:
    text: str = ""
    requests: List[ActionRequest] = field(default_factory=list)

    @classmethod
    def from_message(cls, message: AIMessage) -> "Reply":
        requests = [
            ActionRequest(name=call.get("name"), parameters=call.get("args"), call_id=call.get("id"))
            for call in message.tool_calls
        ]
        # Calls whose arguments did not parse are still surfaced, without parameters
        requests += [
            ActionRequest(name=call.get("name"), parameters=None, call_id=call.get("id"))
            for call in message.invalid_tool_calls
        ]
        return cls(text=message_text(message), requests=requests)


def message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def to_json_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, default=str)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the first JSON object in text, fenced (```json ... ```) or bare."""
    if not text or not text.strip():
        return None
    text = text.strip()
    m = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    candidate = m.group(1).strip() if m else None
    if candidate is None:
        start = text.find("{")
        if start == -1:
            return None
        depth = 0
        for i in range(start, len(text)):
            if text[i] == "{":
                depth += 1
            elif text[i] == "}":
                depth -= 1
                if depth == 0:
                    candidate = text[start : i + 1]
                    break
    if candidate is None:
        return None
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def is_model_not_found_error(e: Exception) -> bool:
    txt = str(e).lower()
    return ("not_found" in txt and "model" in txt) or ("not_found_error" in txt)


def build_chat_model(model_name: str, settings: Optional[AgentSettings] = None) -> ChatAnthropic:
    settings = settings or AgentSettings()
    return ChatAnthropic(
        model=model_name,
        api_key=config.get_api_key(),
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )


class ConversationChannel:
    """
    Owns the conversation history and turns each sent message into a Reply.

    Sends must not overlap; every send appends the outgoing message(s) and the
    model's answer to `history`. The system instruction is not stored in the
    history, it is prepended on each call so it can be swapped between turns.
    """

    def __init__(
        self,
        tools: List[Dict[str, Any]],
        system_instruction: str = SYSTEM_INSTRUCTION,
        model_candidates: Optional[List[str]] = None,
        model_factory: Optional[Callable[[str], Any]] = None,
        settings: Optional[AgentSettings] = None,
    ):
        self.tools = list(tools)
        self.system_instruction = system_instruction
        self.model_candidates = (
            list(model_candidates) if model_candidates is not None else config.get_model_candidates()
        )
        if not self.model_candidates:
            raise ValueError("at least one model candidate is required")
        self._model_factory = model_factory or (lambda name: build_chat_model(name, settings))
        self._model_index = 0
        self._bound = None
        self.history: List[BaseMessage] = []
        # tool_call_id -> action name, for calls in the last reply not yet answered
        self._pending: Dict[str, str] = {}

    @property
    def model_in_use(self) -> str:
        return self.model_candidates[self._model_index]

    def _runnable(self):
        if self._bound is None:
            model = self._model_factory(self.model_in_use)
            self._bound = model.bind_tools(self.tools, parallel_tool_calls=False) if self.tools else model
        return self._bound

    def _outgoing(self, message: Message) -> List[BaseMessage]:
        answered = None
        if isinstance(message, FunctionResult) and message.call_id in self._pending:
            answered = message.call_id
        out: List[BaseMessage] = []
        for call_id, name in self._pending.items():
            if call_id == answered:
                out.append(
                    ToolMessage(content=to_json_text(message.response), tool_call_id=call_id, name=name)
                )
            else:
                out.append(
                    ToolMessage(
                        content=to_json_text(UNANSWERED_CALL_RESULT),
                        tool_call_id=call_id,
                        name=name,
                        status="error",
                    )
                )
        self._pending = {}
        if answered is None:
            if isinstance(message, FunctionResult):
                text = f"Result of {message.name}:\n{to_json_text(message.response)}"
            else:
                text = message
            out.append(HumanMessage(content=text))
        return out

    async def _invoke(self) -> AIMessage:
        while True:
            messages = [SystemMessage(content=self.system_instruction), *self.history]
            try:
                return await self._runnable().ainvoke(messages)
            except Exception as e:
                if is_model_not_found_error(e) and self._model_index + 1 < len(self.model_candidates):
                    LOGGER.warning("model %s not available, falling back", self.model_in_use)
                    self._model_index += 1
                    self._bound = None
                    continue
                raise

    async def send(self, message: Message) -> Reply:
        self.history.extend(self._outgoing(message))
        answer = await self._invoke()
        self.history.append(answer)
        for call in [*answer.tool_calls, *answer.invalid_tool_calls]:
            if call.get("id"):
                self._pending[call["id"]] = call.get("name") or ""
        return Reply.from_message(answer)

    async def ask_json(self, prompt: str) -> Dict[str, Any]:
        reply = await self.send(prompt)
        parsed = extract_json_object(reply.text)
        if parsed is None:
            raise ConversationError(f"Expected a JSON object in the model reply, got: {reply.text[:200]!r}")
        return parsed
