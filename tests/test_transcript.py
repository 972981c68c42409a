from scraper_agent.transcript import MarkdownTranscript


def test_transcript_writes_markdown_and_console(tmp_path, capsys):
    path = tmp_path / "run" / "output.md"
    transcript = MarkdownTranscript(path)

    transcript.task_started("find the docs")
    transcript.agent_response("   ")
    transcript.agent_response("Opening the site.")
    transcript.function_call("navigate", {"url": "https://example.com"})
    transcript.function_result("navigate", {"success": True})
    transcript.error("Error calling function click: boom")
    transcript.system("Processing 1 function call(s)")
    transcript.task_completed(2, 50)

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# Scraper Agent Log\n\n")
    assert "**Objective**: find the docs" in text
    assert text.count("Agent Response") == 1
    assert "### 🔧 Function Call: `navigate`" in text
    assert '"url": "https://example.com"' in text
    assert "#### ❌ Error" in text
    assert "> **System**: Processing 1 function call(s)" in text
    assert "**Attempts used**: 2/50" in text

    out = capsys.readouterr().out
    assert "[Agent] Starting task: find the docs" in out
    assert '[Agent] Calling function navigate with params {"url": "https://example.com"}' in out
    assert "[Agent] Task completed" in out


def test_transcript_restarts_file_and_can_be_quiet(tmp_path, capsys):
    path = tmp_path / "output.md"
    path.write_text("old run\n", encoding="utf-8")

    transcript = MarkdownTranscript(path, echo=False)
    transcript.system("hello")

    assert "old run" not in path.read_text(encoding="utf-8")
    assert capsys.readouterr().out == ""
