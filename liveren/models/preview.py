"""Preview row data model."""

from pydantic import BaseModel, ConfigDict, Field

from liveren.models.listing import Entry


class PreviewRow(BaseModel):
    """One entry's match status and computed new name."""

    model_config = ConfigDict(frozen=True)

    entry: Entry
    matched: bool = Field(description="Whether the match pattern matches the entry name")
    rendered_name: str = Field(description="Name after applying the replacement template")

    @property
    def will_rename(self) -> bool:
        """True if confirming would actually rename this entry."""
        return self.matched and self.rendered_name != self.entry.name

    @property
    def original_label(self) -> str:
        return self.entry.label()

    @property
    def rendered_label(self) -> str:
        return self.entry.label(self.rendered_name)
