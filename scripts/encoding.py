"""
ERP Fixtures - Script Encoding and Decoding Utilities

This module provides the low-level program writer used to compile redeem
scripts (opcodes, minimally encoded numbers and length-prefixed buffers) and
a disassembler that splits compiled programs back into their elements for
human-readable inspection.
"""

import struct
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from scripts.opcodes import ScriptOpcode, MAX_DIRECT_PUSH, small_int_opcode, opcode_name
from scripts.exceptions import ScriptEncodingError, ScriptParseError


def encode_number(value: int) -> bytes:
    """
    Encode an integer as a minimal Bitcoin script number.

    Script numbers are little-endian sign-magnitude. When the most
    significant byte of the magnitude already has its high bit set, an extra
    byte is appended to carry the sign, otherwise a positive value would be
    read back as negative.

    Args:
        value: Integer to encode

    Returns:
        Minimal encoding bytes (empty for zero)
    """
    if value == 0:
        return b''

    negative = value < 0
    magnitude = -value if negative else value

    result = []
    while magnitude > 0:
        result.append(magnitude & 0xff)
        magnitude >>= 8

    if result[-1] & 0x80:
        result.append(0x80 if negative else 0x00)
    elif negative:
        result[-1] |= 0x80

    return bytes(result)


def decode_number(data: bytes) -> int:
    """
    Decode a Bitcoin script number.

    Args:
        data: Little-endian sign-magnitude bytes

    Returns:
        Decoded integer
    """
    if len(data) == 0:
        return 0

    value = int.from_bytes(data, 'little')
    sign_bit = 0x80 << (8 * (len(data) - 1))
    if value & sign_bit:
        return -(value & ~sign_bit)
    return value


class ScriptWriter:
    """
    Byte-program builder for redeem scripts.

    Each write appends to the program being built; ``to_bytes`` returns the
    immutable result. Writes return the writer so calls can be chained.
    """

    def __init__(self):
        """Initialize an empty program."""
        self._parts: List[bytes] = []

    def reset(self) -> None:
        """Discard everything written so far."""
        self._parts.clear()

    def write_opcode(self, opcode: int) -> 'ScriptWriter':
        """
        Append a single opcode byte verbatim.

        Args:
            opcode: Opcode value (0-255)

        Returns:
            Self for method chaining
        """
        if not 0 <= int(opcode) <= 0xff:
            raise ScriptEncodingError(f"Opcode out of byte range: {opcode}")
        self._parts.append(bytes([opcode]))
        return self

    def write_buffer(self, data: bytes) -> 'ScriptWriter':
        """
        Append a push-data operation followed by the raw bytes.

        Args:
            data: Bytes to push

        Returns:
            Self for method chaining
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ScriptEncodingError(f"Buffer must be bytes, got {type(data).__name__}")

        length = len(data)
        if length == 0:
            self._parts.append(bytes([ScriptOpcode.OP_0]))
            return self

        if length <= MAX_DIRECT_PUSH:
            prefix = bytes([length])
        elif length < 0x100:
            prefix = bytes([ScriptOpcode.OP_PUSHDATA1, length])
        elif length < 0x10000:
            prefix = bytes([ScriptOpcode.OP_PUSHDATA2]) + struct.pack('<H', length)
        else:
            prefix = bytes([ScriptOpcode.OP_PUSHDATA4]) + struct.pack('<I', length)

        self._parts.append(prefix + bytes(data))
        return self

    def write_number(self, value: int) -> 'ScriptWriter':
        """
        Append an integer using the shortest push that represents it.

        0, -1 and 1..16 use their dedicated opcodes; anything else is pushed
        as a minimal script number.

        Args:
            value: Integer to push

        Returns:
            Self for method chaining
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ScriptEncodingError(f"Number must be an int, got {type(value).__name__}")

        opcode = small_int_opcode(value)
        if opcode is not None:
            return self.write_opcode(opcode)
        return self.write_buffer(encode_number(value))

    def to_bytes(self) -> bytes:
        """Get the compiled program."""
        return b''.join(self._parts)

    def to_hex(self) -> str:
        """Get the compiled program as a hex string."""
        return self.to_bytes().hex()

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)


@dataclass
class ScriptChunk:
    """A single opcode or push-data element of a script."""
    opcode: int
    data: Optional[bytes] = None

    @property
    def name(self) -> str:
        return opcode_name(self.opcode)

    @property
    def is_push_data(self) -> bool:
        return self.data is not None

    def to_asm(self) -> str:
        """Convert to assembly representation."""
        if self.is_push_data:
            return self.data.hex()
        return self.name


@dataclass
class ParsedScript:
    """Represents a parsed Bitcoin script."""
    chunks: List[ScriptChunk]
    raw_bytes: bytes
    parse_errors: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.raw_bytes)

    def has_errors(self) -> bool:
        """Check if script has parse errors."""
        return len(self.parse_errors) > 0

    def to_asm(self) -> str:
        """Convert to human-readable assembly string."""
        return " ".join(chunk.to_asm() for chunk in self.chunks)

    def to_hex(self) -> str:
        return self.raw_bytes.hex()

    def to_dict(self) -> Dict[str, Any]:
        """Structured description of the script."""
        return {
            "hex": self.to_hex(),
            "asm": self.to_asm(),
            "size": len(self.raw_bytes),
            "valid": not self.has_errors(),
            "elements": [
                {
                    "opcode": chunk.opcode,
                    "name": chunk.name,
                    "data": chunk.data.hex() if chunk.data is not None else None,
                    "data_size": len(chunk.data) if chunk.data is not None else 0,
                }
                for chunk in self.chunks
            ],
            "errors": list(self.parse_errors),
        }


_PUSHDATA_LENGTH_SIZES = {
    ScriptOpcode.OP_PUSHDATA1: 1,
    ScriptOpcode.OP_PUSHDATA2: 2,
    ScriptOpcode.OP_PUSHDATA4: 4,
}


def parse_script(script: bytes) -> ParsedScript:
    """
    Split raw script bytes into opcodes and push-data elements.

    Truncated pushes stop parsing and are reported in ``parse_errors``
    instead of raising.

    Args:
        script: Raw script bytes

    Returns:
        Parsed script
    """
    chunks: List[ScriptChunk] = []
    errors: List[str] = []
    pc = 0

    while pc < len(script):
        opcode = script[pc]
        start = pc
        pc += 1

        if 1 <= opcode <= MAX_DIRECT_PUSH:
            data_len = opcode
        elif opcode in _PUSHDATA_LENGTH_SIZES:
            size = _PUSHDATA_LENGTH_SIZES[opcode]
            if pc + size > len(script):
                errors.append(f"Missing length bytes for {opcode_name(opcode)} at position {start}")
                break
            data_len = int.from_bytes(script[pc:pc + size], 'little')
            pc += size
        else:
            chunks.append(ScriptChunk(opcode=opcode))
            continue

        if pc + data_len > len(script):
            errors.append(f"Insufficient data for push at position {start}")
            break

        chunks.append(ScriptChunk(opcode=opcode, data=script[pc:pc + data_len]))
        pc += data_len

    return ParsedScript(chunks=chunks, raw_bytes=bytes(script), parse_errors=errors)


def script_to_asm(script: bytes) -> str:
    """Convert script bytes to assembly string."""
    return parse_script(script).to_asm()


def script_from_hex(hex_string: str) -> bytes:
    """Convert hex string to script bytes."""
    try:
        return bytes.fromhex(hex_string)
    except ValueError:
        raise ScriptParseError(f"not a hex string: {hex_string}")
