"""Console output provider for hosts that deliver envelopes in batches.

The host owns process lifecycle, transport framing and configuration
binding. It hands the provider a bound ProviderConfig and then calls
``write`` once per batch with a cancellation signal and an opaque context.
"""

import asyncio
import logging
from typing import Any, Protocol, Sequence, runtime_checkable

from models.config import ProviderConfig, Variant
from models.envelope import Envelope
from services.formatter import EnvelopeFormatter
from services.output_sink import ConsoleSink

logger = logging.getLogger(__name__)


class CancellationSignal(Protocol):
    """Anything exposing ``is_set``, e.g. asyncio.Event or threading.Event."""

    def is_set(self) -> bool: ...


@runtime_checkable
class ConfiguredProvider(Protocol):
    """Provider bound to a configuration of type ProviderConfig."""

    config: ProviderConfig


@runtime_checkable
class BatchWriter(Protocol):
    """Provider accepting batches of envelopes."""

    async def write(
        self,
        batch: Sequence[Envelope],
        cancel: CancellationSignal,
        context: Any = None,
    ) -> int: ...


class ConsoleOutputProvider:
    """Writes each envelope of a batch to the console."""

    def __init__(
        self,
        config: ProviderConfig,
        sink: ConsoleSink | None = None,
        formatter: EnvelopeFormatter | None = None,
    ):
        """Initialize provider. Defaults to the minimal variant on stdout."""
        if config is None:
            raise ValueError("config is required")

        self.config = config
        self._sink = sink or ConsoleSink()
        self._formatter = formatter or EnvelopeFormatter(variant=Variant.MINIMAL)
        self._message_count = 0

    @property
    def message_count(self) -> int:
        return self._message_count

    async def write(
        self,
        batch: Sequence[Envelope],
        cancel: CancellationSignal,
        context: Any = None,
    ) -> int:
        """Write a batch, stopping at the first envelope seen after cancel.

        Returns the number of envelopes written. Skipped envelopes are
        neither retried nor buffered.
        """
        if cancel is None:
            raise ValueError("cancel is required")

        logger.debug(f"Received batch of {len(batch)} envelopes (context={context!r})")

        written = 0
        for index, envelope in enumerate(batch):
            if cancel.is_set():
                logger.debug(
                    f"Cancelled, skipping {len(batch) - index} remaining envelopes"
                )
                break

            self._message_count += 1
            try:
                lines = self._formatter.format(
                    envelope, self._message_count, self.config
                )
            except Exception as e:
                logger.error(f"Error processing message #{self._message_count}: {e}")
            else:
                self._sink.write_lines(lines)
                written += 1

            # Let the host flip the signal between envelopes
            await asyncio.sleep(0)

        return written
