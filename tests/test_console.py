# tests/test_console.py

from __future__ import annotations

from task_agent.connectors.console_connector import run_console_loop


def _feed(monkeypatch, lines: list[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_console_roundtrip(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["add task buy milk", "", "complete 1", "list tasks", "/exit", "banana"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Created task ✅: [1] buy milk" in out
    assert "Completed ✅: [1] buy milk" in out
    assert "✅ [1] buy milk" in out
    # Loop stopped at /exit.
    assert "I can help with tasks" not in out
    assert [t.done for t in state.task_store.list_tasks()] == [True]


def test_console_stops_on_eof(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["banana"])
    run_console_loop(state)
    assert "I can help with tasks" in capsys.readouterr().out
