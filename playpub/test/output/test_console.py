"""Tests for playpub.output.console module."""

from __future__ import annotations

import pytest

from playpub.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_shorthands_prefix_and_style(self) -> None:
        console = MockConsole()
        console.success("committed")
        console.error("rejected")
        console.info("uploading")
        console.debug("edit expires")

        assert console.messages == [
            "OK committed",
            "error: rejected",
            "info: uploading",
            "debug: edit expires",
        ]
        assert console.has_error()

    def test_find(self) -> None:
        console = MockConsole()
        console.info("Uploading app.aab")
        console.info("Validating track 'beta'")
        assert len(console.find("Uploading")) == 1


class TestRichConsole:
    def test_debug_hidden_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.debug("hidden detail")
        assert "hidden detail" not in capsys.readouterr().out

    def test_debug_shown_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole(verbose=True)
        console.debug("visible detail")
        assert "visible detail" in capsys.readouterr().out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("[edit-1, packageName=com.example.app]: Uploading")
        assert "[edit-1, packageName=com.example.app]" in capsys.readouterr().out
