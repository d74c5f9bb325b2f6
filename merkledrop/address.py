"""Bech32 encoding and account address conversion."""

from __future__ import annotations

from collections.abc import Iterable

from merkledrop.errors import InvalidAddressError

BECH32_PREFIX = "bitsong"

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_MAP = {char: value for value, char in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_LENGTH = 1023
_MAX_ADDRESS_LENGTH = 255


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ 1
    return [(polymod >> (5 * (5 - shift))) & 31 for shift in range(6)]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value >> from_bits:
            raise ValueError(f"invalid data range: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid incomplete group")
    return out


def _check_printable(text: str) -> None:
    for char in text:
        if not 33 <= ord(char) <= 126:
            raise ValueError(f"invalid character in string: {char!r}")


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode 8-bit ``data`` under the human readable part ``hrp``."""
    if not hrp:
        raise ValueError("empty human readable part")
    _check_printable(hrp)
    hrp = hrp.lower()
    values = _convert_bits(bytes(data), 8, 5, True)
    combined = values + _create_checksum(hrp, values)
    return hrp + "1" + "".join(_CHARSET[v] for v in combined)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its human readable part and 8-bit data."""
    if len(text) < 8 or len(text) > _MAX_LENGTH:
        raise ValueError(f"invalid bech32 string length {len(text)}")
    _check_printable(text)
    lowered = text.lower()
    if lowered != text and text.upper() != text:
        raise ValueError("string not all lowercase or all uppercase")
    separator = lowered.rfind("1")
    if separator < 1 or separator + 7 > len(lowered):
        raise ValueError(f"invalid separator index {separator}")
    hrp, payload = lowered[:separator], lowered[separator + 1 :]
    try:
        values = [_CHARSET_MAP[char] for char in payload]
    except KeyError as exc:
        raise ValueError(f"invalid character not part of charset: {exc.args[0]}") from None
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise ValueError("invalid checksum")
    return hrp, bytes(_convert_bits(values[:-6], 5, 8, False))


def acc_address_from_bech32(text: str, prefix: str = BECH32_PREFIX) -> bytes:
    """Decode a bech32 account address, checking its prefix and length."""
    if not text.strip():
        raise InvalidAddressError("empty address string is not allowed")
    try:
        hrp, data = bech32_decode(text)
    except ValueError as exc:
        raise InvalidAddressError(str(exc)) from exc
    if hrp != prefix:
        raise InvalidAddressError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
    if not data:
        raise InvalidAddressError("addresses cannot be empty")
    if len(data) > _MAX_ADDRESS_LENGTH:
        raise InvalidAddressError(
            f"address max length is {_MAX_ADDRESS_LENGTH}, got {len(data)}"
        )
    return data


def acc_address_to_bech32(address: bytes, prefix: str = BECH32_PREFIX) -> str:
    """Encode raw account address bytes; an empty address gives an empty string."""
    if not address:
        return ""
    return bech32_encode(prefix, bytes(address))