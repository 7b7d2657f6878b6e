"""Identifier generation for load combinations."""

import random
import re
import string
import time
from dataclasses import replace
from typing import List, Optional

from structassist.core.data_models import LoadCombination

_ID_ALPHABET = string.ascii_lowercase + string.digits
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def generate_combination_id(name: str, type_prefix: Optional[str] = None) -> str:
    """Generate a unique ID for a load combination.

    Format is ``<type>_<sanitized name>_<epoch ms>_<6 random chars>``.
    Collisions are possible in principle but negligible for one client.

    Args:
        name: The combination name (e.g., "1.2G + 1.5Q")
        type_prefix: Optional combination type (e.g., "reaction")

    Returns:
        A unique string ID
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))
    sanitized_name = _UNSAFE_CHARS.sub("_", name)
    prefix = f"{type_prefix.lower()}_" if type_prefix else ""
    return f"{prefix}{sanitized_name}_{timestamp}_{suffix}"


def ensure_combination_ids(combinations: List[LoadCombination]) -> List[LoadCombination]:
    """Return the combinations with an ID assigned to any that lacks one.

    Combinations that already have an ID are returned as-is; the others are
    replaced by copies, so the input objects are never modified.
    """
    result: List[LoadCombination] = []
    for combination in combinations:
        if combination.id:
            result.append(combination)
            continue
        type_prefix = combination.combination_type.value if combination.combination_type else None
        result.append(replace(combination, id=generate_combination_id(combination.name, type_prefix)))
    return result
