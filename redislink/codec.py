"""Frame encoders and decoders working on byte buffers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Encoder(ABC):
    """Writes items as bytes into a buffer."""

    @abstractmethod
    def encode(self, item: Any, dst: bytearray) -> None:
        """Append the encoded form of ``item`` to ``dst``."""


class Decoder(ABC):
    """Reads frames out of a buffer."""

    @abstractmethod
    def decode(self, src: bytearray) -> Any | None:
        """Remove one frame from the front of ``src`` and return it, or None if incomplete."""


class BytesCodec(Encoder, Decoder):
    """Passes chunks of bytes through unchanged."""

    def encode(self, item: bytes, dst: bytearray) -> None:
        dst.extend(item)

    def decode(self, src: bytearray) -> bytes | None:
        if not src:
            return None
        chunk = bytes(src)
        src.clear()
        return chunk