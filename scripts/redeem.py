"""
ERP Fixtures - Redeem Script Entity

A RedeemScript bundles the two federations and timelock with the compiled
program and a structural validity flag. Construction never fails on
out-of-bounds sizes or timelocks: the program is compiled anyway and the
instance is flagged invalid so it can serve as a negative fixture.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from crypto.keys import PublicKey
from scripts.erp import (
    EmergencyThresholdPolicy,
    build_erp_redeem_script,
    default_threshold,
    emergency_threshold,
)


# OP_CHECKMULTISIG accepts at most 16 keys; federations stay strictly below
MIN_FEDERATION_SIZE = 1
MAX_FEDERATION_SIZE = 15

# Strictly inside the 16-bit range, excluding 0xffff
MIN_TIMELOCK = 1
MAX_TIMELOCK = 0xfffe


@dataclass(frozen=True)
class RedeemScriptRecord:
    """Export snapshot of a redeem script."""
    main_fed: List[str]
    emergency_fed: List[str]
    timelock: int
    script: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation used in fixture batches."""
        return {
            "mainFed": list(self.main_fed),
            "emergencyFed": list(self.emergency_fed),
            "timelock": self.timelock,
            "script": self.script,
        }


def is_valid_federation_size(size: int) -> bool:
    return MIN_FEDERATION_SIZE <= size <= MAX_FEDERATION_SIZE


def is_valid_timelock(timelock: int) -> bool:
    return MIN_TIMELOCK <= timelock <= MAX_TIMELOCK


def is_valid_threshold(threshold: int, key_count: int) -> bool:
    return 1 <= threshold <= key_count


class RedeemScript:
    """
    An ERP redeem script fixture.

    Args:
        main_federation: Federation public keys, in input order
        emergency_federation: Emergency federation public keys, in input order
        timelock: Relative lock time guarding the emergency path
        policy: Emergency threshold interpretation
    """

    def __init__(
        self,
        main_federation: Sequence[PublicKey],
        emergency_federation: Sequence[PublicKey],
        timelock: int,
        policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED
    ):
        self._main_federation: Tuple[PublicKey, ...] = tuple(main_federation)
        self._emergency_federation: Tuple[PublicKey, ...] = tuple(emergency_federation)
        self._timelock = timelock
        self._policy = policy

        self._main_threshold = default_threshold(len(self._main_federation))
        self._emergency_threshold = emergency_threshold(len(self._emergency_federation), policy)
        self._script = build_erp_redeem_script(
            self._main_threshold,
            self._main_federation,
            self._emergency_threshold,
            self._emergency_federation,
            self._timelock
        )
        self._invalid = not self._is_valid()

    def _is_valid(self) -> bool:
        return (
            is_valid_federation_size(len(self._main_federation)) and
            is_valid_federation_size(len(self._emergency_federation)) and
            is_valid_timelock(self._timelock) and
            is_valid_threshold(self._main_threshold, len(self._main_federation)) and
            is_valid_threshold(self._emergency_threshold, len(self._emergency_federation))
        )

    @property
    def main_federation(self) -> Tuple[PublicKey, ...]:
        return self._main_federation

    @property
    def emergency_federation(self) -> Tuple[PublicKey, ...]:
        return self._emergency_federation

    @property
    def timelock(self) -> int:
        return self._timelock

    @property
    def policy(self) -> EmergencyThresholdPolicy:
        return self._policy

    @property
    def main_threshold(self) -> int:
        return self._main_threshold

    @property
    def emergency_threshold(self) -> int:
        return self._emergency_threshold

    @property
    def script(self) -> bytes:
        return self._script

    @property
    def invalid(self) -> bool:
        return self._invalid

    def export(self) -> RedeemScriptRecord:
        """Snapshot the fixture for serialization."""
        return RedeemScriptRecord(
            main_fed=[str(key) for key in self._main_federation],
            emergency_fed=[str(key) for key in self._emergency_federation],
            timelock=self._timelock,
            script=self._script.hex()
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.export().to_dict()

    def __repr__(self) -> str:
        return (
            f"RedeemScript(main={len(self._main_federation)}, "
            f"emergency={len(self._emergency_federation)}, "
            f"timelock={self._timelock}, invalid={self._invalid})"
        )
