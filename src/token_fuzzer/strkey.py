"""Strkey text encoding for account and contract addresses.

Layout: ``version_byte || payload || crc16_xmodem(version_byte || payload)``
with the checksum little-endian, base32 encoded without padding.
"""

from __future__ import annotations

import base64
import binascii

from .errors import ErrorCode, FixtureError
from .types import ScAddress, ScAddressType

PAYLOAD_SIZE = 32

VERSION_ACCOUNT_ID = 6 << 3  # "G"
VERSION_CONTRACT = 2 << 3  # "C"

_VERSIONS = {
    ScAddressType.ACCOUNT: VERSION_ACCOUNT_ID,
    ScAddressType.CONTRACT: VERSION_CONTRACT,
}
_KINDS = {v: k for k, v in _VERSIONS.items()}


def _checksum(data: bytes) -> bytes:
    # binascii.crc_hqx is CRC-16/XMODEM when seeded with 0
    return binascii.crc_hqx(data, 0).to_bytes(2, "little")


def encode(version: int, payload: bytes) -> str:
    if len(payload) != PAYLOAD_SIZE:
        raise FixtureError(ErrorCode.INVALID_ADDRESS, f"payload must be {PAYLOAD_SIZE} bytes")
    raw = bytes([version]) + bytes(payload)
    return base64.b32encode(raw + _checksum(raw)).decode("ascii").rstrip("=")


def decode(text: str) -> tuple[int, bytes]:
    """Return ``(version, payload)`` after checking length and checksum."""
    padded = text + "=" * (-len(text) % 8)
    try:
        raw = base64.b32decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise FixtureError(ErrorCode.INVALID_ADDRESS, f"not base32: {text!r}") from exc
    if len(raw) != 1 + PAYLOAD_SIZE + 2:
        raise FixtureError(ErrorCode.INVALID_ADDRESS, f"bad strkey length {len(raw)}")
    body, checksum = raw[:-2], raw[-2:]
    if _checksum(body) != checksum:
        raise FixtureError(ErrorCode.INVALID_ADDRESS, "strkey checksum mismatch")
    return body[0], body[1:]


def encode_sc_address(address: ScAddress) -> str:
    return encode(_VERSIONS[address.kind], address.value)


def decode_sc_address(text: str) -> ScAddress:
    version, payload = decode(text)
    kind = _KINDS.get(version)
    if kind is None:
        raise FixtureError(ErrorCode.INVALID_ADDRESS, f"unknown strkey version {version:#04x}")
    return ScAddress(kind, payload)
