"""Transcript of a task run: console lines plus a markdown log file."""
import json
from pathlib import Path
from typing import Any, Union


def _pretty(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, default=str)


class NullTranscript:
    """Discards every event."""

    def task_started(self, task: str) -> None:
        pass

    def agent_response(self, text: str) -> None:
        pass

    def function_call(self, name: str, params: Any) -> None:
        pass

    def function_result(self, name: str, result: Any) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def system(self, message: str) -> None:
        pass

    def task_completed(self, attempts_used: int, max_attempts: int) -> None:
        pass


class MarkdownTranscript(NullTranscript):
    """Prints `[Agent] ...` lines and appends a markdown rendering of each step to `path`."""

    def __init__(self, path: Union[str, Path] = "output.md", echo: bool = True):
        self.path = Path(path)
        self.echo = echo
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("# Scraper Agent Log\n\n", encoding="utf-8")

    def _write(self, console_msg: str, markdown: str) -> None:
        if self.echo:
            print(f"[Agent] {console_msg}")
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"{markdown}\n\n")

    def task_started(self, task: str) -> None:
        self._write(f"Starting task: {task}", f"## 📋 Task Started\n\n**Objective**: {task}\n\n---")

    def agent_response(self, text: str) -> None:
        # skip empty messages
        if not text or not text.strip():
            return
        self._write(text, f"## 🤖 Agent Response\n\n{text}")

    def function_call(self, name: str, params: Any) -> None:
        self._write(
            f"Calling function {name} with params {json.dumps(params, default=str)}",
            f"### 🔧 Function Call: `{name}`\n\n```json\n{_pretty(params)}\n```",
        )

    def function_result(self, name: str, result: Any) -> None:
        self._write(
            f"Function {name} completed successfully",
            f"#### ✅ Result\n\n```\n{_pretty(result)}\n```",
        )

    def error(self, message: str) -> None:
        self._write(message, f"#### ❌ Error\n\n```\n{message}\n```")

    def system(self, message: str) -> None:
        if not message or not message.strip():
            return
        self._write(message, f"> **System**: {message}")

    def task_completed(self, attempts_used: int, max_attempts: int) -> None:
        self._write(
            "Task completed",
            f"## ✅ Task Completed\n\n**Attempts used**: {attempts_used}/{max_attempts}\n\n---",
        )
