"""Command-line entry: run one task with a fresh browser and print the agent's final answer."""
import argparse
import asyncio
import logging

from scraper_agent.agent.scraper import ScraperAgent
from scraper_agent.config import AgentSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scraper-agent", description="LLM-driven browser agent")
    parser.add_argument("--max-attempts", type=int, help="Iteration budget for the task loop")
    parser.add_argument("--headless", action="store_true", help="Run Chromium without a window")
    parser.add_argument("--transcript", help="Markdown transcript path (default: output.md)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("task", nargs="?", help="Natural-language task for the agent")
    return parser


async def run_agent(task: str, settings: AgentSettings) -> str:
    async with ScraperAgent(settings=settings) as agent:
        return await agent.do_task(task)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = AgentSettings.from_env()
    if args.max_attempts is not None:
        if args.max_attempts < 1:
            print("--max-attempts must be a positive integer.")
            return 1
        settings.max_attempts = args.max_attempts
    if args.headless:
        settings.headless = True
    if args.transcript:
        settings.transcript_path = args.transcript

    task = (args.task or input("Task: ")).strip()
    if not task:
        print("No task provided.")
        return 1

    result = asyncio.run(run_agent(task, settings))
    print("\n" + "=" * 30)
    print(result or "(no final text)")
    print("=" * 30)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
