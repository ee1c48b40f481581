"""Envelope formatter: renders one envelope into output lines."""

import json
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic_core import to_jsonable_python

from models.config import OutputFormat, ProviderConfig, Variant
from models.envelope import Envelope

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

HEADER_TEMPLATE = "╭─── Message #{count} ───"
FOOTER = "╰─────────────────────────────"
BORDER = "│"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def render_value(value: Any) -> str:
    """Render a JSON value as display text.

    Strings are shown verbatim; everything else as compact JSON, so
    null reads as ``null`` and nested structures keep their content.
    Values go through pydantic's JSON conversion, the same one
    ``Envelope.to_wire`` uses.
    """
    if isinstance(value, str):
        return value
    return json.dumps(
        to_jsonable_python(value), ensure_ascii=False, separators=(",", ":")
    )


class EnvelopeFormatter:
    """Formats envelopes according to the configured output format."""

    def __init__(
        self,
        variant: Variant = Variant.FULL,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize formatter for a provider variant."""
        if clock is None:
            raise ValueError("clock is required")
        self._variant = Variant(variant)
        self._clock = clock

    @property
    def variant(self) -> Variant:
        return self._variant

    def timestamp(self) -> str:
        """Current clock reading in UTC display form."""
        now = self._clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.strftime(TIMESTAMP_FORMAT)

    def format(
        self, envelope: Envelope, message_count: int, config: ProviderConfig
    ) -> list[str]:
        """Render an envelope into the lines to write."""
        if message_count < 1:
            raise ValueError("message_count must be at least 1")

        output_format = config.resolve_format(self._variant)

        if output_format == OutputFormat.JSON:
            if self._variant == Variant.MINIMAL:
                return [self._format_minimal_json(envelope)]
            return self._format_json(envelope)
        if output_format == OutputFormat.COMPACT:
            return [self._format_compact(envelope)]
        if output_format == OutputFormat.SIMPLE:
            return [f"Message #{message_count}: {render_value(envelope.payload)}"]
        return self._format_structured(envelope, message_count)

    def format_raw(self, line: str) -> list[str]:
        """Render an input line that is not an envelope."""
        return [f"[{self.timestamp()}] [Raw] {line}"]

    def _format_json(self, envelope: Envelope) -> list[str]:
        blob = json.dumps(envelope.to_wire(), indent=2, ensure_ascii=False)
        # Only layout newlines are raw; string values keep U+2028, \x85 etc.
        return blob.split("\n")

    def _format_minimal_json(self, envelope: Envelope) -> str:
        return json.dumps(
            to_jsonable_python(
                {"data": envelope.payload, "metadata": envelope.metadata}
            ),
            ensure_ascii=False,
        )

    def _format_compact(self, envelope: Envelope) -> str:
        return (
            f"[{self.timestamp()}] [{envelope.source}] "
            f"{render_value(envelope.payload)}"
        )

    def _format_structured(self, envelope: Envelope, message_count: int) -> list[str]:
        lines = [
            HEADER_TEMPLATE.format(count=message_count),
            f"{BORDER} Timestamp: {self.timestamp()}",
            f"{BORDER} Source:    {envelope.source}",
            f"{BORDER} Type:      {envelope.type}",
            f"{BORDER} Data:      {render_value(envelope.payload)}",
        ]

        if envelope.metadata:
            lines.append(f"{BORDER} Metadata:")
            for key, value in envelope.metadata.items():
                lines.append(f"{BORDER}   {key}: {render_value(value)}")

        lines.append(FOOTER)
        return lines
