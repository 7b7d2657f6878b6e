"""Element-level combination helpers used before saving or designing an element."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from structassist.core.data_models import LoadCombination, StructuralElement
from .load_combinations import compute_load_combination
from .reaction_sync import ReactionSyncOptions, reaction_load_combinations

logger = logging.getLogger(__name__)


def get_active_combinations(element: StructuralElement) -> List[LoadCombination]:
    """Combinations not explicitly deactivated, in element order."""
    return [combination for combination in element.load_combinations if combination.active]


def compute_all_combinations(element: StructuralElement) -> StructuralElement:
    """Return a copy of the element with ``computed_result`` refreshed on every combination.

    A combination whose computation fails is kept without a fresh result.
    """
    updated: List[LoadCombination] = []

    for combination in element.load_combinations:
        try:
            computed = compute_load_combination(element.applied_loads, combination)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Failed to compute combination '{combination.name}': {e}")
            updated.append(combination)
            continue
        updated.append(replace(combination, computed_result=computed))

    return replace(element, load_combinations=updated)


def prepare_element_for_design(
    element: StructuralElement,
    options: Optional[ReactionSyncOptions] = None,
) -> StructuralElement:
    """Synchronise reaction combinations, then compute every combination.

    Args:
        element: Element as edited by forms or chat
        options: Reaction sync options (defaults keep existing individuals)

    Returns:
        New element ready to be saved or sent for design
    """
    synced = reaction_load_combinations(element, options)
    existing_ids = {combination.id for combination in element.load_combinations if combination.id}
    added = sum(
        1 for combination in synced.load_combinations
        if combination.is_individual and combination.id not in existing_ids
    )
    if added:
        logger.info(f"Added {added} individual reaction combinations to '{element.name}'")
    return compute_all_combinations(synced)
