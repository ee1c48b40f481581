"""Data envelope model for streamed provider input."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Envelope(BaseModel):
    """One unit of streamed data handed over by the pipeline."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    source: str = ""
    type: str = ""
    payload: Any = Field(
        default=None,
        validation_alias=AliasChoices("data", "payload"),
        serialization_alias="data",
    )
    metadata: dict[str, Any] | None = None

    @field_validator("source", "type", mode="before")
    @classmethod
    def empty_when_null(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_wire(self) -> dict[str, Any]:
        """Return the envelope keyed the way it travels on the wire."""
        return self.model_dump(mode="json", by_alias=True)
