# Services package

from services.formatter import EnvelopeFormatter, render_value
from services.input_driver import (
    ConfigurationError,
    InputDriver,
    ParsedEnvelope,
    RawLine,
    RunResult,
    RunStatus,
    parse_config_line,
    parse_envelope_line,
)
from services.log_service import ProviderLogFileHandler, configure_logging
from services.output_sink import ConsoleSink
from services.provider import (
    BatchWriter,
    CancellationSignal,
    ConfiguredProvider,
    ConsoleOutputProvider,
)

__all__ = [
    "BatchWriter",
    "CancellationSignal",
    "ConfigurationError",
    "ConfiguredProvider",
    "ConsoleOutputProvider",
    "ConsoleSink",
    "EnvelopeFormatter",
    "InputDriver",
    "ParsedEnvelope",
    "RawLine",
    "RunResult",
    "RunStatus",
    "ProviderLogFileHandler",
    "configure_logging",
    "parse_config_line",
    "parse_envelope_line",
    "render_value",
]
