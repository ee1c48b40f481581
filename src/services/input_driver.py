"""Line-oriented driver feeding stdin input to the envelope formatter."""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from pydantic import ValidationError

from models.config import ProviderConfig
from models.envelope import Envelope
from services.formatter import EnvelopeFormatter
from services.output_sink import ConsoleSink

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the configuration line cannot be parsed."""

    pass


@dataclass(frozen=True)
class ParsedEnvelope:
    """Line that parsed as an envelope."""

    envelope: Envelope


@dataclass(frozen=True)
class RawLine:
    """Line that did not parse as an envelope, kept verbatim."""

    text: str


ParseResult = ParsedEnvelope | RawLine


class RunStatus(str, Enum):
    """How a driver run ended."""

    COMPLETED = "completed"
    NO_CONFIG = "no_config"
    INVALID_CONFIG = "invalid_config"


@dataclass(frozen=True)
class RunResult:
    """Outcome of a driver run."""

    status: RunStatus
    messages: int = 0
    config: ProviderConfig | None = None


def parse_config_line(line: str) -> ProviderConfig:
    """Parse the configuration line.

    Raises:
        ConfigurationError: If the line is not a JSON object matching
            the configuration shape.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a JSON object, got {type(data).__name__}"
        )

    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def parse_envelope_line(line: str) -> ParseResult:
    """Classify one data line as an envelope or a raw line."""
    try:
        return ParsedEnvelope(Envelope.model_validate_json(line))
    except ValidationError:
        return RawLine(line)


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


class InputDriver:
    """Reads configuration then envelopes, writing formatted output in order."""

    def __init__(self, formatter: EnvelopeFormatter, sink: ConsoleSink):
        """Initialize driver with formatter and output sink."""
        if formatter is None:
            raise ValueError("formatter is required")
        if sink is None:
            raise ValueError("sink is required")

        self._formatter = formatter
        self._sink = sink

    def run(self, lines: Iterable[str]) -> RunResult:
        """Process the whole input stream.

        The first non-empty line is the configuration; every line after it
        is one message. Sink errors propagate.
        """
        logger.info("Starting service...")
        stream = iter(lines)

        config_line = self._read_config_line(stream)
        if config_line is None:
            logger.warning("No configuration received")
            return RunResult(status=RunStatus.NO_CONFIG)

        logger.info(f"Received config: {config_line}")
        try:
            config = parse_config_line(config_line)
        except ConfigurationError as e:
            logger.error(f"Failed to parse configuration: {e}")
            return RunResult(status=RunStatus.INVALID_CONFIG)

        output_format = config.resolve_format(self._formatter.variant)
        logger.info(
            f"Starting data processing (variant={self._formatter.variant.value}, "
            f"format={output_format.value})"
        )

        message_count = 0
        for raw in stream:
            line = _strip_newline(raw)
            message_count += 1
            self._process_line(line, message_count, config)

        logger.info(f"Processed {message_count} messages. Stream ended.")
        return RunResult(
            status=RunStatus.COMPLETED, messages=message_count, config=config
        )

    def _read_config_line(self, stream) -> str | None:
        for raw in stream:
            line = _strip_newline(raw)
            if line.strip():
                return line
        return None

    def _process_line(
        self, line: str, message_count: int, config: ProviderConfig
    ) -> None:
        result = parse_envelope_line(line)

        if isinstance(result, RawLine):
            logger.debug(f"Message #{message_count} is not an envelope, passing raw")
            self._sink.write_lines(self._formatter.format_raw(result.text))
            return

        try:
            output = self._formatter.format(result.envelope, message_count, config)
        except Exception as e:
            logger.error(f"Error processing message #{message_count}: {e}")
            return

        self._sink.write_lines(output)
