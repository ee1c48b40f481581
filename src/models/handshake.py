"""Handshake reply sent to the host before a session starts."""

from pydantic import BaseModel, ConfigDict

PROTOCOL_VERSION = "1"
MAGIC_COOKIE_KEY = "DSTREAM_PLUGIN"
MAGIC_COOKIE_VALUE = "dstream-provider-plugin"


class HandshakeResponse(BaseModel):
    """Fixed compatibility stamp checked by the host process."""

    model_config = ConfigDict(frozen=True)

    protocol_version: str = PROTOCOL_VERSION
    magic_cookie_key: str = MAGIC_COOKIE_KEY
    magic_cookie_value: str = MAGIC_COOKIE_VALUE
