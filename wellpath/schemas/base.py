"""Shared pydantic base for models exchanged with the app and content files."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Snake_case attributes in Python, camelCase keys on the wire.

    Content bundles and progress snapshots are authored with camelCase keys
    (daysRange, chapterId, quizScores); either spelling is accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump with camelCase keys, dropping unset optional values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
