"""Models package."""

from models.config import OutputFormat, ProviderConfig, Variant
from models.envelope import Envelope
from models.handshake import HandshakeResponse

__all__ = [
    "Envelope",
    "HandshakeResponse",
    "OutputFormat",
    "ProviderConfig",
    "Variant",
]
