from __future__ import annotations

import base64
import binascii
import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator


class PayloadDecodeError(ValueError):
    """Raised when an input payload cannot be decoded with its codec."""


class ContainerKind(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class Codec(str, Enum):
    JSON = "json"
    RAW = "raw"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _lossy_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class BytesContainer(BaseModel):
    """Raw payload bytes plus their display form and any decode failure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ContainerKind
    codec: Codec
    raw: bytes
    humanized: str
    encoding_error: Optional[str] = None

    @classmethod
    def new(cls, kind: ContainerKind, codec: Codec, raw: bytes) -> "BytesContainer":
        """Decode ``raw`` with ``codec``.

        Valid JSON is stored in compact form, so sizes reflect what the module
        actually receives or emits. Undecodable output keeps its bytes and
        records the parser error; undecodable input raises PayloadDecodeError.
        """
        kind = ContainerKind(kind)
        codec = Codec(codec)
        raw = bytes(raw)
        if codec is Codec.RAW:
            return cls(kind=kind, codec=codec, raw=raw, humanized=_lossy_text(raw))

        try:
            value = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
        except ValueError as exc:
            if kind is ContainerKind.INPUT:
                raise PayloadDecodeError(f"input is not valid JSON: {exc}") from exc
            return cls(
                kind=kind,
                codec=codec,
                raw=raw,
                humanized=_lossy_text(raw),
                encoding_error=str(exc),
            )
        compact = json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        humanized = json.dumps(value, indent=2, ensure_ascii=False)
        return cls(kind=kind, codec=codec, raw=compact, humanized=humanized)

    @classmethod
    def json_input(cls, raw: bytes) -> "BytesContainer":
        return cls.new(ContainerKind.INPUT, Codec.JSON, raw)

    @classmethod
    def json_output(cls, raw: bytes) -> "BytesContainer":
        return cls.new(ContainerKind.OUTPUT, Codec.JSON, raw)

    @field_validator("raw", mode="before")
    @classmethod
    def _decode_raw(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value.encode("ascii"), validate=True)
            except (binascii.Error, UnicodeEncodeError) as exc:
                raise ValueError("raw must be base64 encoded text") from exc
        return value

    @field_serializer("raw", when_used="json")
    def _encode_raw(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")

    def __len__(self) -> int:
        return len(self.raw)


__all__ = ["BytesContainer", "Codec", "ContainerKind", "PayloadDecodeError"]
