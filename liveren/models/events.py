"""Discrete input events consumed by the state machine."""

from enum import Enum

from pydantic import BaseModel, Field

from liveren.models.session import FocusField


class KeyCode(str, Enum):
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    ENTER = "enter"
    OTHER = "other"


class KeyEventKind(str, Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class KeyEvent(BaseModel):
    """A key press, repeat or release."""

    code: KeyCode
    kind: KeyEventKind = KeyEventKind.PRESS


class TextEdit(BaseModel):
    """New full value of one of the two text fields."""

    field: FocusField = Field(description="Field that was edited")
    value: str = Field(description="Complete edited text")


class Resize(BaseModel):
    """Terminal size change. Has no effect on session state."""

    width: int
    height: int


InputEvent = KeyEvent | TextEdit | Resize
