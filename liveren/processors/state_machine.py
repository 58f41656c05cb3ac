"""Interaction state machine driving a rename session."""

from collections.abc import Sequence
from pathlib import Path

from liveren.models.events import InputEvent, KeyCode, KeyEvent, KeyEventKind, TextEdit
from liveren.models.listing import Entry
from liveren.models.preview import PreviewRow
from liveren.models.session import FocusField, PatternState, SessionResult, SessionState
from liveren.processors.pattern_engine import PatternEngine
from liveren.processors.preview import derive_preview
from liveren.processors.rename_executor import RenameExecutor


def clamp_scroll(scroll: int, item_count: int) -> int:
    """Clamp a scroll offset to [0, max(item_count - 1, 0)]."""
    return max(min(scroll, item_count - 1), 0)


def transition(state: SessionState, event: InputEvent, item_count: int) -> SessionState:
    """Compute the next state for every event except Enter.

    Enter needs the filesystem and is handled by `StateMachine.dispatch`;
    here it leaves the state unchanged, like any unbound key.
    """
    if state.is_done:
        return state

    if isinstance(event, TextEdit):
        if event.field is not state.focus:
            return state
        if event.field is FocusField.MATCH:
            return state.model_copy(update={"match_text": event.value})
        return state.model_copy(update={"replace_text": event.value})

    if not isinstance(event, KeyEvent) or event.kind is KeyEventKind.RELEASE:
        return state

    if event.code is KeyCode.UP:
        return state.model_copy(update={"scroll": clamp_scroll(state.scroll - 1, item_count)})
    if event.code is KeyCode.DOWN:
        return state.model_copy(update={"scroll": clamp_scroll(state.scroll + 1, item_count)})
    if event.code is KeyCode.TAB:
        return state.model_copy(update={"focus": state.focus.toggled()})

    return state


class StateMachine:
    """Owns the state of one rename session.

    The listing is fixed for the lifetime of the machine; everything else
    changes only through `dispatch` or `cancel`.
    """

    def __init__(
        self,
        listing: Sequence[Entry],
        directory: Path,
        result: SessionResult | None = None,
        executor: RenameExecutor | None = None,
        patterns: PatternState | None = None,
    ) -> None:
        self.listing = tuple(listing)
        self.directory = directory
        self.result = result if result is not None else SessionResult()
        self.executor = executor or RenameExecutor()
        patterns = patterns or PatternState()
        self.state = SessionState(match_text=patterns.match_text, replace_text=patterns.replace_text)
        self._engine_text = self.state.match_text
        self._engine = PatternEngine.compile(self._engine_text)

    @property
    def item_count(self) -> int:
        return len(self.listing)

    @property
    def engine(self) -> PatternEngine:
        if self._engine_text != self.state.match_text:
            self._engine_text = self.state.match_text
            self._engine = PatternEngine.compile(self._engine_text)
        return self._engine

    def preview(self) -> list[PreviewRow]:
        return derive_preview(self.listing, self.engine, self.state.patterns)

    def dispatch(self, event: InputEvent) -> SessionState:
        """Apply one input event and return the new state."""
        if self.state.is_done:
            return self.state

        if (
            isinstance(event, KeyEvent)
            and event.code is KeyCode.ENTER
            and event.kind is not KeyEventKind.RELEASE
        ):
            code = self.executor.execute(
                self.listing,
                self.engine,
                self.state.patterns,
                self.directory,
                self.result,
            )
            self.state = self.state.model_copy(update={"done": self.result.finish(code)})
            return self.state

        self.state = transition(self.state, event, self.item_count)
        return self.state

    def cancel(self) -> SessionState:
        """End the session without renaming anything."""
        if not self.state.is_done:
            self.state = self.state.model_copy(update={"done": self.result.finish(0)})
        return self.state
