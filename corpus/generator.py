"""
ERP Fixtures - Corpus Generation

Builds batches of redeem script fixtures: randomly sized federations and
timelocks for the requested mode, followed by a fixed catalogue of scripts
that reproduce parser bugs found in the past.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from crypto.keys import KeyPairGenerator, PublicKey
from scripts.erp import EmergencyThresholdPolicy
from scripts.redeem import RedeemScript


class GenerationMode(Enum):
    """Kind of fixtures to generate."""
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class SamplingBounds:
    """Half-open ranges random fixtures are drawn from."""
    federation_size: Tuple[int, int]
    timelock: Tuple[int, int]


# 16 keys is the most OP_CHECKMULTISIG accepts, so valid federations stay below it
VALID_BOUNDS = SamplingBounds(federation_size=(1, 16), timelock=(256, 65536))
INVALID_BOUNDS = SamplingBounds(federation_size=(1, 128), timelock=(0, 2 ** 32))

MODE_BOUNDS = {
    GenerationMode.VALID: VALID_BOUNDS,
    GenerationMode.INVALID: INVALID_BOUNDS,
}

# 0xc9eb: the little-endian bytes eb c9 end with the sign bit set
SIGN_BIT_TIMELOCK = 51691


class FixtureFactory:
    """
    Creates redeem scripts from an explicit random source.

    Handed to bug reproductions so they draw keys from the same seeded
    stream as the random fixtures.
    """

    def __init__(
        self,
        rng: random.Random,
        key_generator: Optional[KeyPairGenerator] = None,
        policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED
    ):
        self.rng = rng
        self.key_generator = key_generator or KeyPairGenerator(rng)
        self.policy = policy

    def random_int(self, bounds: Tuple[int, int]) -> int:
        """Draw an integer from the half-open range ``[low, high)``."""
        low, high = bounds
        return self.rng.randrange(low, high)

    def random_federation(self, size_bounds: Tuple[int, int]) -> List[PublicKey]:
        """Generate a federation whose size is drawn from ``size_bounds``."""
        return self.key_generator.generate_public_keys(self.random_int(size_bounds))

    def random_redeem_script(self, bounds: SamplingBounds) -> RedeemScript:
        """Create a redeem script with every input drawn from ``bounds``."""
        timelock = self.random_int(bounds.timelock)
        main_federation = self.random_federation(bounds.federation_size)
        emergency_federation = self.random_federation(bounds.federation_size)
        return self.redeem_script(main_federation, emergency_federation, timelock)

    def redeem_script(
        self,
        main_federation: List[PublicKey],
        emergency_federation: List[PublicKey],
        timelock: int
    ) -> RedeemScript:
        return RedeemScript(main_federation, emergency_federation, timelock, self.policy)


@dataclass(frozen=True)
class BugReproduction:
    """A named recipe for a fixture that once tripped up a parser."""
    label: str
    description: str
    build: Callable[[FixtureFactory], RedeemScript]


class BugCatalogue:
    """Immutable, ordered collection of bug reproductions."""

    def __init__(self, entries: Tuple[BugReproduction, ...] = ()):
        labels = [entry.label for entry in entries]
        if len(labels) != len(set(labels)):
            raise ValueError("Bug reproduction labels must be unique")
        self._entries = tuple(entries)

    def __iter__(self) -> Iterator[BugReproduction]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def labels(self) -> List[str]:
        return [entry.label for entry in self._entries]

    def build_all(self, factory: FixtureFactory) -> List[RedeemScript]:
        """Build every reproduction, in catalogue order."""
        return [entry.build(factory) for entry in self._entries]


def _sign_bit_timelock_script(factory: FixtureFactory) -> RedeemScript:
    # A parser stripped the trailing zero byte of this timelock and turned
    # it into a negative number.
    main_federation = factory.random_federation(VALID_BOUNDS.federation_size)
    emergency_federation = factory.random_federation(VALID_BOUNDS.federation_size)
    return factory.redeem_script(main_federation, emergency_federation, SIGN_BIT_TIMELOCK)


VALID_BUG_CATALOGUE = BugCatalogue((
    BugReproduction(
        label="csv-timelock-sign-bit",
        description="Timelock 51691 needs a zero sign byte after its minimal encoding",
        build=_sign_bit_timelock_script,
    ),
))

INVALID_BUG_CATALOGUE = BugCatalogue()


class CorpusGenerator:
    """
    Generates fixture batches for a given mode.

    Args:
        rng: Random source; created from ``seed`` when omitted
        seed: Seed for a fresh random source
        policy: Emergency threshold interpretation applied to every fixture
        key_generator: Key-pair generator; defaults to one drawing from ``rng``
        valid_catalogue: Bug reproductions appended in valid mode
        invalid_catalogue: Bug reproductions appended in invalid mode
        progress_interval: Log progress every this many fixtures (0 disables)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        policy: EmergencyThresholdPolicy = EmergencyThresholdPolicy.COMPUTED,
        key_generator: Optional[KeyPairGenerator] = None,
        valid_catalogue: BugCatalogue = VALID_BUG_CATALOGUE,
        invalid_catalogue: BugCatalogue = INVALID_BUG_CATALOGUE,
        progress_interval: int = 100
    ):
        self.rng = rng if rng is not None else random.Random(seed)
        self.factory = FixtureFactory(self.rng, key_generator, policy)
        self.catalogues = {
            GenerationMode.VALID: valid_catalogue,
            GenerationMode.INVALID: invalid_catalogue,
        }
        self.progress_interval = progress_interval
        self.logger = logging.getLogger(__name__)

    def catalogue_for(self, mode: GenerationMode) -> BugCatalogue:
        return self.catalogues[mode]

    def generate(self, mode: GenerationMode, count: int) -> List[RedeemScript]:
        """
        Generate ``count`` random fixtures followed by the mode's bug catalogue.

        Args:
            mode: Valid or invalid sampling bounds
            count: Number of random fixtures

        Returns:
            ``count + len(catalogue)`` redeem scripts
        """
        mode = GenerationMode(mode)
        if count < 0:
            raise ValueError(f"Fixture count must be non-negative, got {count}")

        bounds = MODE_BOUNDS[mode]
        scripts: List[RedeemScript] = []

        for i in range(count):
            scripts.append(self.factory.random_redeem_script(bounds))
            if self.progress_interval and i % self.progress_interval == 0:
                self.logger.info(f"Progress: {i}/{count}")

        catalogue = self.catalogue_for(mode)
        scripts.extend(catalogue.build_all(self.factory))
        self.logger.debug(
            f"Generated {count} random {mode.value} fixtures and "
            f"{len(catalogue)} bug reproductions"
        )

        return scripts
