"""Live rename preview derivation."""

from collections.abc import Sequence

from liveren.models.listing import Entry
from liveren.models.preview import PreviewRow
from liveren.models.session import PatternState
from liveren.processors.pattern_engine import PatternEngine


def derive_preview(
    listing: Sequence[Entry],
    engine: PatternEngine,
    patterns: PatternState,
) -> list[PreviewRow]:
    """Compute one preview row per listing entry, in listing order.

    Pure: the same inputs always give the same rows.
    """
    rows: list[PreviewRow] = []
    for entry in listing:
        matched = engine.is_match(entry.name)
        rendered = engine.render(entry.name, patterns.replace_text) if matched else entry.name
        rows.append(PreviewRow(entry=entry, matched=matched, rendered_name=rendered))
    return rows
