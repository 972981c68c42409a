"""Task loop: ask the model, run the actions it requests, feed results back, until done or out of budget."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwright.async_api import Page

from scraper_agent.agent.channel import ConversationChannel, FunctionResult
from scraper_agent.config import DEFAULT_MAX_ATTEMPTS
from scraper_agent.errors import BrowserSessionError
from scraper_agent.tools.registry import ActionRegistry
from scraper_agent.transcript import NullTranscript

LOGGER = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid function call - missing name or parameters"


class LoopOutcome(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass
class LoopState:
    max_attempts: int
    attempts_used: int = 0
    last_response_text: str = ""
    terminated: bool = False
    outcome: LoopOutcome = LoopOutcome.RUNNING


@dataclass
class SessionContext:
    """The page and conversation one task runs against; owned by the caller."""

    page: Optional[Page]
    channel: ConversationChannel


def validate_max_attempts(max_attempts: int) -> int:
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        raise ValueError(f"max_attempts must be a positive integer, got {max_attempts!r}")
    return max_attempts


class TaskLoop:
    """
    Drives one task through the conversation channel.

    Every outer iteration counts as one attempt, however many action requests
    the current reply carries. Requests in a batch run strictly in order and
    each result is sent back before the next request is dispatched. Action
    failures never end the task: they are reported to the model, which
    decides how to recover. A reply without action requests ends the task.
    """

    def __init__(
        self,
        context: SessionContext,
        registry: ActionRegistry,
        transcript=None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.context = context
        self.registry = registry
        self.transcript = transcript or NullTranscript()
        self.max_attempts = validate_max_attempts(max_attempts)
        self.state: Optional[LoopState] = None

    async def run(self, task: str) -> str:
        page = self.context.page
        if page is None:
            raise BrowserSessionError("Failed to initialize page")
        channel = self.context.channel

        state = LoopState(max_attempts=self.max_attempts)
        self.state = state
        self.transcript.task_started(task)

        reply = await channel.send(task)
        state.last_response_text = reply.text

        while state.attempts_used < state.max_attempts:
            state.attempts_used += 1
            self.transcript.agent_response(reply.text)

            batch = reply.requests
            if not batch:
                self.transcript.system("No function calls found - task may be complete")
                state.terminated = True
                state.outcome = LoopOutcome.COMPLETED
                break

            self.transcript.system(f"Processing {len(batch)} function call(s)")
            for request in batch:
                if not request.name or request.parameters is None:
                    LOGGER.warning("dropping malformed action request: %r", request)
                    self.transcript.system(INVALID_REQUEST_MESSAGE)
                    reply = await channel.send(INVALID_REQUEST_MESSAGE)
                    state.last_response_text = reply.text
                    break

                self.transcript.function_call(request.name, request.parameters)
                try:
                    result = await self.registry.dispatch(page, request.name, request.parameters)
                except Exception as e:
                    error_msg = f"Error calling function {request.name}: {e}"
                    LOGGER.debug("dispatch of %s raised", request.name, exc_info=True)
                    self.transcript.error(error_msg)
                    reply = await channel.send(error_msg)
                else:
                    self.transcript.function_result(request.name, result)
                    reply = await channel.send(
                        FunctionResult(name=request.name, response=result, call_id=request.call_id)
                    )
                state.last_response_text = reply.text

        if not state.terminated:
            state.outcome = LoopOutcome.BUDGET_EXHAUSTED
            self.transcript.system(f"Max attempts reached ({state.max_attempts})")

        self.transcript.task_completed(state.attempts_used, state.max_attempts)
        return state.last_response_text
