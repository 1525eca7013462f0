"""
ERP Fixtures - Enhanced Retirement Process Redeem Scripts

This module compiles the two-path federation redeem script described by
RSKIP201:

    OP_NOTIF
        <M> <pubkey1> ... <pubkeyN> <N>
    OP_ELSE
        <timelock> OP_CHECKSEQUENCEVERIFY OP_DROP
        <M'> <emergencyPubkey1> ... <emergencyPubkeyN'> <N'>
    OP_ENDIF
    OP_CHECKMULTISIG

Both branches leave threshold, keys and key count on the stack so a single
trailing OP_CHECKMULTISIG serves either spending path.

References:
- RSKIP201: https://github.com/rsksmart/RSKIPs/blob/master/IPs/RSKIP201.md
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from crypto.keys import PublicKey
from scripts.encoding import ScriptWriter
from scripts.opcodes import ScriptOpcode


# RSKIP201 prose describes the emergency federation as a 3-of-4 multisig
RSKIP_EMERGENCY_KEY_COUNT = 4
RSKIP_EMERGENCY_THRESHOLD = 3


class EmergencyThresholdPolicy(Enum):
    """
    How the emergency federation threshold is derived.

    RSKIP201's prose fixes the emergency federation at 3-of-4 while its
    pseudocode shows a 2-of-3; the node implementation computes a simple
    majority instead. COMPUTED follows the node, FIXED follows the prose,
    capped at the federation size so smaller federations stay spendable.
    """
    COMPUTED = "computed"
    FIXED = "fixed"


def sort_public_keys(keys: Iterable[PublicKey]) -> List[PublicKey]:
    """
    Order keys by their compressed encoding, byte by byte.

    The sort is stable and keeps duplicates.

    Args:
        keys: Public keys in any order

    Returns:
        New list in canonical order
    """
    return sorted(keys, key=lambda key: key.bytes)


def default_threshold(key_count: int) -> int:
    """Majority threshold for a federation of ``key_count`` keys."""
    return key_count // 2 + 1


def emergency_threshold(key_count: int,
                        policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED) -> int:
    """
    Threshold for the emergency federation under the given policy.

    Args:
        key_count: Size of the emergency federation
        policy: Threshold interpretation to apply

    Returns:
        Required signature count
    """
    if policy is EmergencyThresholdPolicy.FIXED:
        return min(RSKIP_EMERGENCY_THRESHOLD, key_count)
    return default_threshold(key_count)


def build_erp_redeem_script(
    main_threshold: int,
    main_keys: Sequence[PublicKey],
    emergency_threshold_value: int,
    emergency_keys: Sequence[PublicKey],
    timelock: int
) -> bytes:
    """
    Compile an ERP redeem script with caller-supplied thresholds.

    No bounds are enforced here; out-of-range inputs still compile so they
    can be used as negative fixtures.

    Args:
        main_threshold: Signatures required on the federation path
        main_keys: Federation public keys
        emergency_threshold_value: Signatures required on the emergency path
        emergency_keys: Emergency federation public keys
        timelock: Relative lock time guarding the emergency path

    Returns:
        Compiled script bytes
    """
    sorted_main = sort_public_keys(main_keys)
    sorted_emergency = sort_public_keys(emergency_keys)

    writer = ScriptWriter()
    writer.write_opcode(ScriptOpcode.OP_NOTIF)

    writer.write_number(main_threshold)
    for key in sorted_main:
        writer.write_buffer(key.bytes)
    writer.write_number(len(sorted_main))

    writer.write_opcode(ScriptOpcode.OP_ELSE)

    writer.write_number(timelock)
    writer.write_opcode(ScriptOpcode.OP_CHECKSEQUENCEVERIFY)
    writer.write_opcode(ScriptOpcode.OP_DROP)

    writer.write_number(emergency_threshold_value)
    for key in sorted_emergency:
        writer.write_buffer(key.bytes)
    writer.write_number(len(sorted_emergency))

    writer.write_opcode(ScriptOpcode.OP_ENDIF)
    writer.write_opcode(ScriptOpcode.OP_CHECKMULTISIG)

    return writer.to_bytes()


def build_erp_redeem_script_by_rskj(
    main_keys: Sequence[PublicKey],
    emergency_keys: Sequence[PublicKey],
    timelock: int,
    policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED
) -> bytes:
    """
    Compile an ERP redeem script with thresholds derived from set sizes.

    Args:
        main_keys: Federation public keys
        emergency_keys: Emergency federation public keys
        timelock: Relative lock time guarding the emergency path
        policy: Emergency threshold interpretation

    Returns:
        Compiled script bytes
    """
    return build_erp_redeem_script(
        default_threshold(len(main_keys)),
        main_keys,
        emergency_threshold(len(emergency_keys), policy),
        emergency_keys,
        timelock
    )


def build_erp_redeem_script_by_rskip(
    main_keys: Sequence[PublicKey],
    emergency_keys: Sequence[PublicKey],
    timelock: int,
    policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED
) -> Optional[bytes]:
    """
    Compile an ERP redeem script only for a four-key emergency federation.

    Returns None when the emergency federation does not have exactly four
    keys; callers skip the fixture in that case.
    """
    if len(emergency_keys) != RSKIP_EMERGENCY_KEY_COUNT:
        return None
    return build_erp_redeem_script_by_rskj(main_keys, emergency_keys, timelock, policy)
