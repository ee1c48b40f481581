"""Provider configuration received as the first input line."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OutputFormat(str, Enum):
    """Supported envelope renderings."""

    STRUCTURED = "structured"
    COMPACT = "compact"
    JSON = "json"
    SIMPLE = "simple"


class Variant(str, Enum):
    """Provider flavour, which decides the available output formats."""

    FULL = "full"
    MINIMAL = "minimal"

    @property
    def formats(self) -> frozenset[OutputFormat]:
        return _VARIANT_FORMATS[self]

    @property
    def default_format(self) -> OutputFormat:
        return _VARIANT_DEFAULTS[self]


_VARIANT_FORMATS = {
    Variant.FULL: frozenset(
        {OutputFormat.STRUCTURED, OutputFormat.COMPACT, OutputFormat.JSON}
    ),
    Variant.MINIMAL: frozenset({OutputFormat.SIMPLE, OutputFormat.JSON}),
}

_VARIANT_DEFAULTS = {
    Variant.FULL: OutputFormat.STRUCTURED,
    Variant.MINIMAL: OutputFormat.SIMPLE,
}


class ProviderConfig(BaseModel):
    """Run configuration, parsed once and held for the whole stream."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    output_format: OutputFormat | None = Field(default=None, alias="outputFormat")
    settings: dict[str, Any] = {}

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_output_format(cls, v: Any) -> OutputFormat | None:
        # Unknown selectors fall back to the variant default later on
        if isinstance(v, OutputFormat) or v is None:
            return v
        if not isinstance(v, str):
            return None
        try:
            return OutputFormat(v.strip().lower())
        except ValueError:
            return None

    @field_validator("settings", mode="before")
    @classmethod
    def settings_default_when_null(cls, v: Any) -> Any:
        return {} if v is None else v

    def resolve_format(self, variant: Variant) -> OutputFormat:
        """Return the format to render with under the given variant."""
        if self.output_format in variant.formats:
            return self.output_format
        return variant.default_format
