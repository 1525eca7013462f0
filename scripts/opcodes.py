"""
ERP Fixtures - Bitcoin Script Opcodes

Opcode values used when compiling and disassembling redeem scripts.
"""

from enum import IntEnum
from typing import Optional


class ScriptOpcode(IntEnum):
    """Bitcoin Script opcodes used in redeem script construction."""

    # Constants
    OP_0 = 0x00
    OP_PUSHDATA1 = 0x4c
    OP_PUSHDATA2 = 0x4d
    OP_PUSHDATA4 = 0x4e
    OP_1NEGATE = 0x4f
    OP_1 = 0x51
    OP_2 = 0x52
    OP_3 = 0x53
    OP_4 = 0x54
    OP_5 = 0x55
    OP_6 = 0x56
    OP_7 = 0x57
    OP_8 = 0x58
    OP_9 = 0x59
    OP_10 = 0x5a
    OP_11 = 0x5b
    OP_12 = 0x5c
    OP_13 = 0x5d
    OP_14 = 0x5e
    OP_15 = 0x5f
    OP_16 = 0x60

    # Flow control
    OP_NOP = 0x61
    OP_IF = 0x63
    OP_NOTIF = 0x64
    OP_ELSE = 0x67
    OP_ENDIF = 0x68
    OP_VERIFY = 0x69
    OP_RETURN = 0x6a

    # Stack operations
    OP_DROP = 0x75
    OP_DUP = 0x76

    # Bitwise logic
    OP_EQUAL = 0x87
    OP_EQUALVERIFY = 0x88

    # Crypto
    OP_HASH160 = 0xa9
    OP_CHECKSIG = 0xac
    OP_CHECKSIGVERIFY = 0xad
    OP_CHECKMULTISIG = 0xae
    OP_CHECKMULTISIGVERIFY = 0xaf

    # Expansion
    OP_CHECKLOCKTIMEVERIFY = 0xb1
    OP_CHECKSEQUENCEVERIFY = 0xb2


# Largest payload pushed with a bare length byte
MAX_DIRECT_PUSH = 75


def small_int_opcode(value: int) -> Optional[int]:
    """
    Get the single-byte opcode for a small integer.

    Args:
        value: Integer to encode

    Returns:
        OP_0, OP_1NEGATE or OP_1..OP_16, or None if no such opcode exists
    """
    if value == 0:
        return ScriptOpcode.OP_0
    if value == -1:
        return ScriptOpcode.OP_1NEGATE
    if 1 <= value <= 16:
        return ScriptOpcode.OP_1 + value - 1
    return None


def opcode_name(opcode: int) -> str:
    """Get the display name of an opcode."""
    if 1 <= opcode <= MAX_DIRECT_PUSH:
        return f"OP_PUSHBYTES_{opcode}"
    try:
        return ScriptOpcode(opcode).name
    except ValueError:
        return f"OP_UNKNOWN_{opcode:02x}"
