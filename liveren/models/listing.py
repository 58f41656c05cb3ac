"""Directory listing data models."""

import os

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """A single immediate child of the working directory."""

    model_config = ConfigDict(frozen=True)

    is_file: bool = Field(description="True for regular files, False for directories and other entry kinds")
    name: str = Field(description="Display name (lossy if the OS name is not valid UTF-8)")
    raw_name: bytes | None = Field(
        description="OS name bytes when they are not valid UTF-8, kept so the entry can still be renamed",
        default=None,
    )

    @property
    def source_name(self) -> str:
        """Name to use when touching the filesystem."""
        if self.raw_name is not None:
            return os.fsdecode(self.raw_name)
        return self.name

    def label(self, name: str | None = None) -> str:
        """Display label for this entry, optionally showing another name."""
        shown = self.name if name is None else name
        if self.is_file:
            return f"📄 {shown}"
        return f"📁 {shown}/"


class LoadedListing(BaseModel):
    """Result of reading a directory once at startup."""

    entries: list[Entry] = Field(description="Entries sorted by case-insensitive name", default_factory=list)
    error_lines: list[str] = Field(
        description="Non-fatal errors for entries that had to be skipped",
        default_factory=list,
    )

    def __len__(self) -> int:
        return len(self.entries)
