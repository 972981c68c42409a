"""LLM-driven browser agent: a Claude function-calling loop over Playwright actions."""

from scraper_agent.agent import ScraperAgent, StatusReport, TaskLoop
from scraper_agent.config import AgentSettings

__all__ = ["AgentSettings", "ScraperAgent", "StatusReport", "TaskLoop"]
