"""
ERP Fixtures - Corpus Module

Generation and serialization of redeem script fixture batches.
"""

from .generator import (
    GenerationMode,
    SamplingBounds,
    FixtureFactory,
    BugReproduction,
    BugCatalogue,
    CorpusGenerator,
    VALID_BOUNDS,
    INVALID_BOUNDS,
    VALID_BUG_CATALOGUE,
    INVALID_BUG_CATALOGUE,
    SIGN_BIT_TIMELOCK,
)
from .writer import (
    batch_to_records,
    serialize_batch,
    write_batch,
    load_batch,
)

__all__ = [
    "GenerationMode",
    "SamplingBounds",
    "FixtureFactory",
    "BugReproduction",
    "BugCatalogue",
    "CorpusGenerator",
    "VALID_BOUNDS",
    "INVALID_BOUNDS",
    "VALID_BUG_CATALOGUE",
    "INVALID_BUG_CATALOGUE",
    "SIGN_BIT_TIMELOCK",
    "batch_to_records",
    "serialize_batch",
    "write_batch",
    "load_batch",
]
