from scraper_agent.agent.channel import ActionRequest, ConversationChannel, FunctionResult, Reply
from scraper_agent.agent.loop import LoopOutcome, LoopState, SessionContext, TaskLoop
from scraper_agent.agent.scraper import ScraperAgent, StatusReport

__all__ = [
    "ActionRequest",
    "ConversationChannel",
    "FunctionResult",
    "LoopOutcome",
    "LoopState",
    "Reply",
    "ScraperAgent",
    "SessionContext",
    "StatusReport",
    "TaskLoop",
]
