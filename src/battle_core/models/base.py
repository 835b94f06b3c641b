"""Shared pydantic base for persisted records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable record serialized with camelCase keys.

    Instances are never mutated in place; updates go through
    ``model_copy(update=...)`` so every public operation is copy-on-write.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump to a JSON-compatible dict using wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["WireModel"]
