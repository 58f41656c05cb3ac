"""Headless tests for the textual front end."""

import asyncio
from pathlib import Path

import pytest
from textual.widgets import Input

from liveren.models.listing import Entry
from liveren.models.preview import PreviewRow
from liveren.models.session import FocusField, PatternState
from liveren.processors.listing_loader import load_listing
from liveren.processors.state_machine import StateMachine
from liveren.tui import IDLE_STYLE, MATCHED_STYLE, RENAMED_STYLE, RenameApp, render_columns


@pytest.fixture
def txt_dir(tmp_path: Path) -> Path:
    (tmp_path / "foo.txt").touch()
    (tmp_path / "bar.txt").touch()
    (tmp_path / "docs").mkdir()
    return tmp_path


def _machine(directory: Path, match_text: str = "(.*)", replace_text: str = "$1") -> StateMachine:
    return StateMachine(
        load_listing(directory).entries,
        directory,
        patterns=PatternState(match_text=match_text, replace_text=replace_text),
    )


class TestRenderColumns:
    """Tests for column rendering."""

    def test_plain_text(self):
        """Test the labels shown in both columns."""
        rows = [
            PreviewRow(entry=Entry(is_file=True, name="a.txt"), matched=True, rendered_name="a.bak"),
            PreviewRow(entry=Entry(is_file=False, name="dir"), matched=False, rendered_name="dir"),
        ]

        original, renamed = render_columns(rows)

        assert original.plain == "📄 a.txt\n📁 dir/"
        assert renamed.plain == "📄 a.bak\n📁 dir/"

    def test_highlighting(self):
        """Test that matched and renamed rows are highlighted."""
        rows = [
            PreviewRow(entry=Entry(is_file=True, name="a"), matched=True, rendered_name="b"),
            PreviewRow(entry=Entry(is_file=True, name="c"), matched=True, rendered_name="c"),
            PreviewRow(entry=Entry(is_file=True, name="d"), matched=False, rendered_name="d"),
        ]

        original, renamed = render_columns(rows)

        assert [str(span.style) for span in original.spans] == [MATCHED_STYLE, MATCHED_STYLE, IDLE_STYLE]
        assert [str(span.style) for span in renamed.spans] == [RENAMED_STYLE, IDLE_STYLE, IDLE_STYLE]

    def test_empty(self):
        """Test rendering an empty listing."""
        original, renamed = render_columns([])

        assert original.plain == ""
        assert renamed.plain == ""


class TestRenameApp:
    """Tests for RenameApp driven through textual's pilot."""

    def test_starts_with_match_focused(self, txt_dir):
        """Test that the match input has focus after startup."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                await pilot.pause()
                return app.focused.id

        assert asyncio.run(run()) == "match-input"

    def test_tab_switches_field(self, txt_dir):
        """Test that Tab moves focus to the rename input."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                await pilot.press("tab")
                await pilot.pause()
                return app.machine.state.focus, app.focused.id

        focus, widget_id = asyncio.run(run())
        assert focus is FocusField.RENAME
        assert widget_id == "rename-input"

    def test_scroll_keys(self, txt_dir):
        """Test that Down/Up change the scroll offset within bounds."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                offsets = []
                for key in ["down", "down", "down", "up"]:
                    await pilot.press(key)
                    offsets.append(app.machine.state.scroll)
                return offsets

        assert asyncio.run(run()) == [1, 2, 2, 1]

    def test_editing_match_updates_state(self, txt_dir):
        """Test that changing the match input feeds the state machine."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                app.query_one("#match-input", Input).value = "foo"
                await pilot.pause()
                return app.machine.state.match_text, [row.matched for row in app.machine.preview()]

        match_text, matched = asyncio.run(run())
        assert match_text == "foo"
        assert matched == [False, False, True]

    def test_enter_renames_and_exits(self, txt_dir):
        """Test that Enter performs the renames and returns the session result."""

        async def run():
            app = RenameApp(_machine(txt_dir, r"(.*)\.txt", "$1.bak"))
            async with app.run_test() as pilot:
                await pilot.press("enter")
                await pilot.pause()
            return app.return_value

        result = asyncio.run(run())
        assert result.exit_code == 0
        assert result.info_lines == ["bar.txt -> bar.bak", "foo.txt -> foo.bak"]
        assert sorted(p.name for p in txt_dir.iterdir()) == ["bar.bak", "docs", "foo.bak"]

    def test_escape_cancels(self, txt_dir):
        """Test that Escape exits without renaming."""

        async def run():
            app = RenameApp(_machine(txt_dir, r"(.*)\.txt", "$1.bak"))
            async with app.run_test() as pilot:
                await pilot.press("escape")
                await pilot.pause()
            return app.return_value

        result = asyncio.run(run())
        assert result.exit_code == 0
        assert result.info_lines == []
        assert (txt_dir / "foo.txt").exists()

    def test_click_then_type_edits_clicked_field(self, txt_dir):
        """Test that focusing the rename input with the mouse makes edits reach the state."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                await pilot.click("#rename-input")
                await pilot.press("end", "x")
                await pilot.pause()
                widget_value = app.query_one("#rename-input", Input).value
                return app.machine.state.focus, app.machine.state.replace_text, widget_value, app.focused.id

        focus, replace_text, widget_value, widget_id = asyncio.run(run())
        assert focus is FocusField.RENAME
        assert replace_text == "$1x"
        assert widget_value == replace_text
        assert widget_id == "rename-input"

    def test_shift_tab_keeps_state_in_sync(self, txt_dir):
        """Test that textual's own focus cycling also moves the state's focus."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                await pilot.press("shift+tab")
                await pilot.pause()
                return app.machine.state.focus, app.focused.id

        focus, widget_id = asyncio.run(run())
        assert widget_id == "rename-input"
        assert focus is FocusField.RENAME

    def test_enter_after_click_uses_visible_template(self, txt_dir):
        """Test that confirming renames with the text shown in the rename input."""

        async def run():
            app = RenameApp(_machine(txt_dir, r"(.*)\.txt", "$1"))
            async with app.run_test() as pilot:
                await pilot.click("#rename-input")
                await pilot.press("end", *".bak", "enter")
                await pilot.pause()
            return app.return_value

        result = asyncio.run(run())
        assert result.info_lines == ["bar.txt -> bar.bak", "foo.txt -> foo.bak"]

    def test_invalid_match_pattern_flagged(self, txt_dir):
        """Test that the match input is marked while its pattern does not compile."""

        async def run():
            app = RenameApp(_machine(txt_dir))
            async with app.run_test() as pilot:
                match_input = app.query_one("#match-input", Input)
                match_input.value = "(foo"
                await pilot.pause()
                flagged = match_input.has_class("-invalid")
                match_input.value = "(foo)"
                await pilot.pause()
                return flagged, match_input.has_class("-invalid")

        assert asyncio.run(run()) == (True, False)
