"""Interactive session data models."""

from enum import Enum

from pydantic import BaseModel, Field


DEFAULT_MATCH_TEXT = "(.*)"
DEFAULT_REPLACE_TEXT = "$1"


class FocusField(str, Enum):
    """Text field that currently receives edits."""

    MATCH = "match"
    RENAME = "rename"

    def toggled(self) -> "FocusField":
        return FocusField.RENAME if self is FocusField.MATCH else FocusField.MATCH


class PatternState(BaseModel):
    """The two user-editable pattern strings."""

    match_text: str = Field(description="Regular expression tested against each name", default=DEFAULT_MATCH_TEXT)
    replace_text: str = Field(
        description="Replacement template with $N / ${name} back-references",
        default=DEFAULT_REPLACE_TEXT,
    )


class SessionState(BaseModel):
    """Composite state owned by the interaction state machine."""

    focus: FocusField = FocusField.MATCH
    scroll: int = Field(description="Index of the first visible row", default=0, ge=0)
    match_text: str = DEFAULT_MATCH_TEXT
    replace_text: str = DEFAULT_REPLACE_TEXT
    done: int | None = Field(description="Exit code once the session has terminated", default=None)

    @property
    def patterns(self) -> PatternState:
        return PatternState(match_text=self.match_text, replace_text=self.replace_text)

    @property
    def is_done(self) -> bool:
        return self.done is not None


class SessionResult(BaseModel):
    """Terminating payload handed back to the process shell.

    Lines are only ever appended. An error recorded with ``fatal=True``
    latches a failing exit code that later successes cannot clear.
    """

    exit_code: int = 0
    info_lines: list[str] = Field(default_factory=list)
    error_lines: list[str] = Field(default_factory=list)
    latched: bool = Field(description="Set once any failure has been recorded", default=False)

    def add_info(self, line: str) -> None:
        self.info_lines.append(line)

    def add_error(self, line: str, fatal: bool = True) -> None:
        self.error_lines.append(line)
        if fatal:
            self.latched = True
            self.exit_code = 1

    def finish(self, code: int) -> int:
        """Set the final exit code, keeping a latched failure."""
        self.exit_code = 1 if self.latched else code
        return self.exit_code

    @property
    def failed(self) -> bool:
        return self.exit_code != 0
