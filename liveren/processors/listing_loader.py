"""One-shot directory listing loader."""

import os
import stat
from pathlib import Path

from liveren.models.listing import Entry, LoadedListing


class DirectoryReadError(Exception):
    """Raised when the working directory itself cannot be enumerated."""


def _display_name(raw: str) -> str:
    """Decode an OS name for display, replacing undecodable bytes."""
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError:
        return os.fsencode(raw).decode("utf-8", errors="replace")
    return raw


def load_listing(directory: Path) -> LoadedListing:
    """Read the immediate children of a directory.

    Entries whose metadata cannot be read are skipped and reported in
    ``error_lines``; they never abort the load.

    Args:
        directory: Directory to enumerate (not recursed into).

    Returns:
        LoadedListing with entries sorted by case-insensitive name.

    Raises:
        DirectoryReadError: If the directory cannot be opened or iterated.
    """
    entries: list[Entry] = []
    error_lines: list[str] = []

    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    # Symlinks are listed as non-files, same as the link itself.
                    st = dir_entry.stat(follow_symlinks=False)
                except OSError as e:
                    error_lines.append(f"ERROR: Could not read entry metadata: {e}")
                    continue

                name = _display_name(dir_entry.name)
                entries.append(
                    Entry(
                        is_file=stat.S_ISREG(st.st_mode),
                        name=name,
                        raw_name=os.fsencode(dir_entry.name) if name != dir_entry.name else None,
                    )
                )
    except OSError as e:
        raise DirectoryReadError(f"ERROR: Could not read directory: {e}") from e

    entries.sort(key=lambda entry: entry.name.lower())
    return LoadedListing(entries=entries, error_lines=error_lines)
