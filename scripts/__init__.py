"""
ERP Fixtures - Script Compilation Module

This module compiles Enhanced Retirement Process redeem scripts:
- Opcode, number and buffer writing with minimal number encoding
- Canonical key ordering and threshold derivation
- The RedeemScript fixture entity and its export record
"""

from .exceptions import (
    ScriptError,
    ScriptEncodingError,
    ScriptParseError,
)
from .opcodes import ScriptOpcode
from .encoding import (
    ScriptWriter,
    ParsedScript,
    ScriptChunk,
    encode_number,
    decode_number,
    parse_script,
    script_to_asm,
    script_from_hex,
)
from .erp import (
    EmergencyThresholdPolicy,
    sort_public_keys,
    default_threshold,
    emergency_threshold,
    build_erp_redeem_script,
    build_erp_redeem_script_by_rskj,
    build_erp_redeem_script_by_rskip,
)
from .redeem import (
    RedeemScript,
    RedeemScriptRecord,
)

__all__ = [
    # Exceptions
    "ScriptError",
    "ScriptEncodingError",
    "ScriptParseError",

    # Encoding
    "ScriptOpcode",
    "ScriptWriter",
    "ParsedScript",
    "ScriptChunk",
    "encode_number",
    "decode_number",
    "parse_script",
    "script_to_asm",
    "script_from_hex",

    # ERP compilation
    "EmergencyThresholdPolicy",
    "sort_public_keys",
    "default_threshold",
    "emergency_threshold",
    "build_erp_redeem_script",
    "build_erp_redeem_script_by_rskj",
    "build_erp_redeem_script_by_rskip",

    # Fixtures
    "RedeemScript",
    "RedeemScriptRecord",
]
