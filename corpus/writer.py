"""
ERP Fixtures - Batch Serialization

Serializes generated redeem scripts to the JSON array consumed by
downstream parser test suites.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from scripts.redeem import RedeemScript

logger = logging.getLogger(__name__)


def batch_to_records(scripts: Sequence[RedeemScript]) -> List[Dict[str, Any]]:
    """Export every script in the batch to its wire representation."""
    return [script.to_dict() for script in scripts]


def serialize_batch(scripts: Sequence[RedeemScript], indent: Optional[int] = None) -> str:
    """
    Serialize a batch to a JSON array.

    Args:
        scripts: Redeem scripts to serialize
        indent: JSON indentation; compact when None

    Returns:
        JSON text
    """
    separators = (',', ':') if indent is None else None
    return json.dumps(batch_to_records(scripts), indent=indent, separators=separators)


def write_batch(
    scripts: Sequence[RedeemScript],
    file_path: Union[str, Path],
    indent: Optional[int] = None
) -> Path:
    """
    Write a batch to a file, replacing any previous content.

    Args:
        scripts: Redeem scripts to write
        file_path: Destination path
        indent: JSON indentation; compact when None

    Returns:
        Path that was written
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        f.write(serialize_batch(scripts, indent=indent))

    logger.info(f"Wrote {len(scripts)} redeem scripts to {path}")
    return path


def load_batch(file_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load a previously written batch."""
    with open(Path(file_path), 'r') as f:
        return json.load(f)
