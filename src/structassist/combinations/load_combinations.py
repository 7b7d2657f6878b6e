"""
Load Combination Engine

Applies the factors of a load combination to the load-case-tagged forces of
each applied load and sums them into one factored load per applied load.

Rules:
- A force contributes ``magnitude * factor * termFactor`` using the first
  factor row of its load case that is not explicitly inactive.
- A force whose load case has no active row contributes nothing.
- The first contributing force seeds every ordinate of the result; later
  forces add to ordinate 0, and to ordinate 1 only for trapezoidal loads.

The engine is stateless and never modifies its inputs.
"""

from typing import List, Optional

from structassist.core.constants import LOAD_CASE_SYMBOLS
from structassist.core.data_models import (
    AppliedLoad,
    CombinedLoad,
    LoadCaseFactor,
    LoadCaseType,
    LoadCombination,
    LoadType,
)


def find_active_factor(
    combination: LoadCombination,
    load_case: LoadCaseType,
) -> Optional[LoadCaseFactor]:
    """Get the first active factor row for a load case.

    Args:
        combination: Load combination to search
        load_case: Load case of the force being factored

    Returns:
        Matching LoadCaseFactor, or None if the load case is not in the combination
    """
    for load_case_factor in combination.load_case_factors:
        if load_case_factor.load_case_type == load_case and load_case_factor.active:
            return load_case_factor
    return None


def compute_applied_load(
    applied_load: AppliedLoad,
    combination: LoadCombination,
) -> CombinedLoad:
    """Compute the factored load of one applied load under a combination.

    Args:
        applied_load: Applied load with one force per load case
        combination: Load combination with factors

    Returns:
        CombinedLoad named after the combination, with a copied position
    """
    total_magnitude: List[float] = []

    for force in applied_load.forces:
        load_case_factor = find_active_factor(combination, force.load_case)
        if load_case_factor is None:
            continue

        combined_factor = load_case_factor.combined_factor

        if not total_magnitude:
            total_magnitude = [m * combined_factor for m in force.magnitude]
            continue

        first = force.magnitude[0] if force.magnitude else 0.0
        total_magnitude[0] += first * combined_factor

        # Second ordinate accumulates for trapezoids only
        if applied_load.type == LoadType.TRAPEZOIDAL_LOAD and len(force.magnitude) > 1:
            if len(total_magnitude) < 2:
                total_magnitude.append(0.0)
            total_magnitude[1] += force.magnitude[1] * combined_factor

    return CombinedLoad(
        type=applied_load.type,
        name=combination.name,
        position=list(applied_load.position),
        magnitude=total_magnitude,
    )


def compute_load_combination(
    applied_loads: List[AppliedLoad],
    combination: LoadCombination,
) -> List[CombinedLoad]:
    """Compute one combined load per applied load, in input order."""
    return [compute_applied_load(applied_load, combination) for applied_load in applied_loads]


def format_combination_equation(combination: LoadCombination) -> str:
    """Generate a combination equation string for reporting.

    Uses the effective multiplier (factor x term factor) of each active row.

    Returns:
        Equation string (e.g., "1.2G + 1.5Q")
    """
    def format_term(factor: float, symbol: str) -> str:
        if factor == 1.0:
            return symbol
        if factor == -1.0:
            return f"-{symbol}"
        return f"{factor:.3g}{symbol}"

    terms = [
        format_term(lcf.combined_factor, LOAD_CASE_SYMBOLS[lcf.load_case_type.value])
        for lcf in combination.load_case_factors
        if lcf.active and lcf.combined_factor != 0
    ]
    return " + ".join(terms).replace(" + -", " - ")


class LoadCombinationCalculator:
    """Object interface over the engine functions, for callers holding a calculator."""

    def compute_load_combination(
        self,
        applied_loads: List[AppliedLoad],
        combination: LoadCombination,
    ) -> List[CombinedLoad]:
        return compute_load_combination(applied_loads, combination)

    def compute_applied_load(
        self,
        applied_load: AppliedLoad,
        combination: LoadCombination,
    ) -> CombinedLoad:
        return compute_applied_load(applied_load, combination)
