"""
Reaction Combination Synchronizer

Keeps exactly one individual (single load case) reaction combination per
load case present on an element, so support reactions can be reported per
load case. User-created multi-factor combinations are never touched.

The synchronizer works copy-on-write: the element passed in is left as it
was and an updated copy is returned.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Set, Union

from structassist.core.constants import (
    DEFAULT_REACTION_FACTOR,
    DEFAULT_REACTION_TERM_FACTOR,
    REACTION_DESCRIPTION_TEMPLATE,
    REACTION_FACTOR_DESCRIPTION_TEMPLATE,
)
from structassist.core.data_models import (
    CombinationType,
    LoadCaseFactor,
    LoadCaseType,
    LoadCombination,
    StructuralElement,
)
from .combination_ids import ensure_combination_ids, generate_combination_id


@dataclass
class ReactionSyncOptions:
    """Options for reaction_load_combinations.

    Attributes:
        force_regenerate: Drop every existing individual combination and rebuild the set
        include_inactive: Also collect load cases from inactive combinations
        custom_factors: Per load case ``{"factor": ..., "termFactor": ...}`` overrides,
            keyed by load case name (e.g. "Dead") or LoadCaseType
    """
    force_regenerate: bool = False
    include_inactive: bool = False
    custom_factors: Dict[Union[str, LoadCaseType], Dict[str, float]] = field(default_factory=dict)

    def factors_for(self, load_case: LoadCaseType) -> Dict[str, float]:
        custom = self.custom_factors.get(load_case.value)
        if custom is None:
            custom = self.custom_factors.get(load_case, {})
        return {
            "factor": custom.get("factor", DEFAULT_REACTION_FACTOR),
            "termFactor": custom.get("termFactor", DEFAULT_REACTION_TERM_FACTOR),
        }


@dataclass
class CombinationSummary:
    """Counts and load case coverage of an element's combinations"""
    total_combinations: int
    individual_combinations: int
    multi_factor_combinations: int
    load_case_types: List[LoadCaseType]
    missing_individual_combinations: List[LoadCaseType]

    @property
    def needs_sync(self) -> bool:
        """True when some load case has no individual combination yet"""
        return bool(self.missing_individual_combinations)

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalCombinations": self.total_combinations,
            "individualCombinations": self.individual_combinations,
            "multiFactorCombinations": self.multi_factor_combinations,
            "loadCaseTypes": [lc.value for lc in self.load_case_types],
            "missingIndividualCombinations": [lc.value for lc in self.missing_individual_combinations],
        }


def build_individual_combination(
    load_case: LoadCaseType,
    factor: float = DEFAULT_REACTION_FACTOR,
    term_factor: float = DEFAULT_REACTION_TERM_FACTOR,
) -> LoadCombination:
    """Create the individual reaction combination for one load case."""
    return LoadCombination(
        id=generate_combination_id(load_case.value, CombinationType.REACTION.value),
        name=load_case.value,
        description=REACTION_DESCRIPTION_TEMPLATE.format(load_case=load_case.value),
        combination_type=CombinationType.REACTION,
        is_active=True,
        load_case_factors=[
            LoadCaseFactor(
                load_case_type=load_case,
                factor=factor,
                term_factor=term_factor,
                description=REACTION_FACTOR_DESCRIPTION_TEMPLATE.format(load_case=load_case.value),
                is_active=True,
            )
        ],
    )


def _collect_load_cases(
    element: StructuralElement,
    include_inactive: bool,
) -> List[LoadCaseType]:
    """Load cases from the applied loads, then from existing combinations.

    Order is first-seen so the synthesized set is reproducible.
    """
    load_cases = element.load_case_types()
    for combination in element.load_combinations:
        if not (include_inactive or combination.active):
            continue
        for load_case_factor in combination.load_case_factors:
            if load_case_factor.load_case_type not in load_cases:
                load_cases.append(load_case_factor.load_case_type)
    return load_cases


def reaction_load_combinations(
    element: StructuralElement,
    options: Optional[ReactionSyncOptions] = None,
) -> StructuralElement:
    """Ensure individual load case combinations exist for reaction analysis.

    Args:
        element: The structural element to process (left unmodified)
        options: Sync options, defaults to ReactionSyncOptions()

    Returns:
        Copy of the element with individual combinations appended to
        ``load_combinations``, IDs backfilled, and new individuals mirrored
        into ``reactions``
    """
    options = options or ReactionSyncOptions()
    combinations = list(element.load_combinations)

    load_cases = _collect_load_cases(element, options.include_inactive)

    covered: Set[LoadCaseType] = set()
    if not options.force_regenerate:
        covered = {
            combination.load_case_factors[0].load_case_type
            for combination in combinations
            if combination.is_individual
        }

    new_individuals: List[LoadCombination] = []
    for load_case in load_cases:
        if load_case in covered:
            continue
        factors = options.factors_for(load_case)
        new_individuals.append(
            build_individual_combination(load_case, factors["factor"], factors["termFactor"])
        )

    if options.force_regenerate:
        combinations = [c for c in combinations if not c.is_individual]

    combinations.extend(new_individuals)
    combinations = ensure_combination_ids(combinations)

    reactions = list(element.reactions)
    existing_reaction_ids = {r.id for r in reactions if r.id}
    for combination in new_individuals:
        if combination.id not in existing_reaction_ids:
            reactions.append(combination.copy())
            existing_reaction_ids.add(combination.id)

    return replace(element, load_combinations=combinations, reactions=reactions)


def get_individual_combinations(element: StructuralElement) -> List[LoadCombination]:
    """Get the active individual load case combinations of an element."""
    return [
        combination for combination in element.load_combinations
        if combination.is_individual and combination.active
    ]


def get_combination_summary(element: StructuralElement) -> CombinationSummary:
    """Summarise an element's combinations and which load cases lack an individual one.

    Args:
        element: The structural element

    Returns:
        CombinationSummary with counts and load case coverage
    """
    individuals = get_individual_combinations(element)
    multi_factor = [
        combination for combination in element.load_combinations
        if len(combination.load_case_factors) > 1 and combination.active
    ]

    load_cases = element.load_case_types()
    covered = {combination.load_case_factors[0].load_case_type for combination in individuals}

    return CombinationSummary(
        total_combinations=len(element.load_combinations),
        individual_combinations=len(individuals),
        multi_factor_combinations=len(multi_factor),
        load_case_types=load_cases,
        missing_individual_combinations=[lc for lc in load_cases if lc not in covered],
    )
