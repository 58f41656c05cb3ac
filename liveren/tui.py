"""Textual front end for an interactive rename session."""

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Input, Label, Static

from liveren.models.events import InputEvent, KeyCode, KeyEvent, Resize, TextEdit
from liveren.models.preview import PreviewRow
from liveren.models.session import FocusField, SessionResult
from liveren.processors.state_machine import StateMachine


MATCHED_STYLE = "green"
RENAMED_STYLE = "red"
IDLE_STYLE = "grey50"

INPUT_IDS = {
    FocusField.MATCH: "match-input",
    FocusField.RENAME: "rename-input",
}


def render_columns(rows: list[PreviewRow]) -> tuple[Text, Text]:
    """Build the "current name" and "renamed name" column texts."""
    original = Text("\n").join(
        Text(row.original_label, style=MATCHED_STYLE if row.matched else IDLE_STYLE) for row in rows
    )
    renamed = Text("\n").join(
        Text(row.rendered_label, style=RENAMED_STYLE if row.will_rename else IDLE_STYLE) for row in rows
    )
    return original, renamed


class RenameApp(App[SessionResult]):
    """Side-by-side rename preview with match and rename inputs.

    Every message is translated into an input event for the state machine,
    after which both columns are redrawn from a fresh preview.
    """

    TITLE = "liveren"

    CSS = """
    #columns {
        height: 1fr;
    }
    .column {
        width: 1fr;
        height: 100%;
        border: double $primary;
        padding: 0 1;
        overflow: hidden;
    }
    #fields {
        height: 1;
        padding: 0 1;
    }
    #fields Label {
        padding: 0 1;
    }
    #fields Input {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0 1;
        background: $background;
    }
    #fields Input:focus {
        border: none;
        background: $boost;
    }
    #fields Input.-invalid {
        color: $error;
    }
    """

    BINDINGS = [
        Binding("up", "scroll_rows('up')", "Scroll up", priority=True, show=False),
        Binding("down", "scroll_rows('down')", "Scroll down", priority=True, show=False),
        Binding("tab", "toggle_focus", "Switch field", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", priority=True, show=False),
    ]

    def __init__(self, machine: StateMachine) -> None:
        super().__init__()
        self.machine = machine

    def compose(self) -> ComposeResult:
        with Horizontal(id="columns"):
            yield Static(id="original", classes="column")
            yield Static(id="renamed", classes="column")
        with Horizontal(id="fields"):
            yield Label("Match:")
            yield Input(value=self.machine.state.match_text, id=INPUT_IDS[FocusField.MATCH])
            yield Label("Rename:")
            yield Input(value=self.machine.state.replace_text, id=INPUT_IDS[FocusField.RENAME])

    def on_mount(self) -> None:
        self.refresh_preview()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        if isinstance(event.widget, Input):
            self.sync_focus(event.widget)

    def on_input_changed(self, event: Input.Changed) -> None:
        # A click or shift+tab can focus an input without going through the tab binding.
        if event.input.has_focus:
            self.sync_focus(event.input)
        self.handle_input_event(TextEdit(field=self.field_of(event.input), value=event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.handle_input_event(KeyEvent(code=KeyCode.ENTER))

    def on_resize(self, event: events.Resize) -> None:
        self.machine.dispatch(Resize(width=event.size.width, height=event.size.height))

    def action_scroll_rows(self, direction: str) -> None:
        self.handle_input_event(KeyEvent(code=KeyCode.UP if direction == "up" else KeyCode.DOWN))

    def action_toggle_focus(self) -> None:
        self.handle_input_event(KeyEvent(code=KeyCode.TAB))

    def action_cancel(self) -> None:
        self.machine.cancel()
        self.exit(self.machine.result)

    def field_of(self, widget: Input) -> FocusField:
        return FocusField.MATCH if widget.id == INPUT_IDS[FocusField.MATCH] else FocusField.RENAME

    def sync_focus(self, widget: Input) -> None:
        """Move the state's focus to the input textual has focused."""
        if self.field_of(widget) is not self.machine.state.focus:
            self.handle_input_event(KeyEvent(code=KeyCode.TAB))

    def handle_input_event(self, event: InputEvent) -> None:
        """Dispatch one event and redraw, or exit once the session is done."""
        state = self.machine.dispatch(event)
        if state.is_done:
            self.exit(self.machine.result)
            return
        self.refresh_preview()

    def refresh_preview(self) -> None:
        rows = self.machine.preview()[self.machine.state.scroll :]
        original, renamed = render_columns(rows)
        self.query_one("#original", Static).update(original)
        self.query_one("#renamed", Static).update(renamed)
        self.query_one(f"#{INPUT_IDS[FocusField.MATCH]}", Input).set_class(not self.machine.engine.valid, "-invalid")

        focused = self.query_one(f"#{INPUT_IDS[self.machine.state.focus]}", Input)
        if not focused.has_focus:
            focused.focus()
