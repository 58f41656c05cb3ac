"""Apply a confirmed rename preview to the filesystem."""

import os
from collections.abc import Sequence
from pathlib import Path

from liveren.models.listing import Entry
from liveren.models.session import PatternState, SessionResult
from liveren.processors.pattern_engine import PatternEngine
from liveren.processors.preview import derive_preview


class RenameExecutor:
    """Performs renames in listing order, stopping at the first failure.

    Not transactional: renames applied before a failure are kept.
    """

    def plan(
        self,
        listing: Sequence[Entry],
        engine: PatternEngine,
        patterns: PatternState,
    ) -> list[tuple[Entry, str]]:
        """List the (entry, new name) pairs that confirming would rename."""
        if not patterns.replace_text:
            return []

        return [
            (row.entry, row.rendered_name)
            for row in derive_preview(listing, engine, patterns)
            if row.will_rename
        ]

    def execute(
        self,
        listing: Sequence[Entry],
        engine: PatternEngine,
        patterns: PatternState,
        directory: Path,
        result: SessionResult,
    ) -> int:
        """Rename every matched entry inside ``directory``.

        Args:
            listing: Entries in canonical order.
            engine: Compiled match pattern.
            patterns: Current match/replace text.
            directory: Directory holding the entries.
            result: Receives one info line per successful rename and
                an error line for the failure, if any.

        Returns:
            0 if every attempted rename succeeded, 1 otherwise.
        """
        for entry, new_name in self.plan(listing, engine, patterns):
            line = f"{entry.name} -> {new_name}"
            try:
                os.rename(directory / entry.source_name, directory / new_name)
            except OSError as e:
                result.add_error(f"ERROR: Could not rename file: {line}: {e}")
                return 1
            result.add_info(line)

        return 0
