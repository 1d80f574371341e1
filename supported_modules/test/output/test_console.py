"""Tests for supported_modules.output.console."""

from __future__ import annotations

import pytest

from supported_modules.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "BOLD", "HEADER"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_shortcuts(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("failed")
        console.warning("careful")
        console.info("fyi")
        console.header("Section")
        assert console.messages == [
            "OK done",
            "error: failed",
            "warning: careful",
            "info: fyi",
            "Section",
        ]
        assert [o.style for o in console.outputs] == [
            Style.SUCCESS,
            Style.ERROR,
            Style.WARNING,
            Style.INFO,
            Style.HEADER,
        ]

    def test_table(self) -> None:
        console = MockConsole()
        console.table("lockstepped", ("packagist", "majors"), [("silverstripe/admin", "5: 2")])
        assert console.outputs[0] == OutputRecord("lockstepped", Style.HEADER)
        assert console.outputs[1].message == "silverstripe/admin  5: 2"

    def test_text_and_find(self) -> None:
        console = MockConsole()
        console.print("line1")
        console.print("line2")
        assert console.text == "line1\nline2"
        assert len(console.find("line")) == 2

    def test_has_error_and_count(self) -> None:
        console = MockConsole()
        assert console.has_error() is False
        console.error("e1")
        console.print("plain", Style.DIM)
        assert console.has_error() is True
        assert console.count(Style.ERROR) == 1
        assert console.count(Style.DIM) == 1


class TestRichConsole:
    def test_prints_without_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("[not markup]")
        assert "[not markup]" in capsys.readouterr().out

    def test_shortcut_prefixes(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("boom")
        console.warning("careful")
        out = capsys.readouterr().out
        assert "error: boom" in out
        assert "warning: careful" in out

    def test_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().table("majors", ("packagist", "majors"), [("silverstripe/admin", "5: 2")])
        out = capsys.readouterr().out
        assert "majors" in out
        assert "silverstripe/admin" in out

    def test_satisfies_protocol(self) -> None:
        def accept_console(_c: ConsoleProtocol) -> bool:
            return True

        assert accept_console(RichConsole())
        assert accept_console(MockConsole())
