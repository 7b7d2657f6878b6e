"""
StructAssist - load combination engine for a structural design assistant

Combines load-case-tagged applied loads into factored design loads per
combination, keeps individual reaction combinations in sync with the load
cases present on an element, and prepares payloads for the remote design
service.

Usage:
    from structassist import StructuralElement, prepare_element_for_design

    element = StructuralElement.from_dict(document)
    element = prepare_element_for_design(element)
"""

from structassist.core.data_models import (
    LoadType,
    LoadCaseType,
    CombinationType,
    SupportFixityType,
    ForceEntry,
    AppliedLoad,
    LoadCaseFactor,
    CombinedLoad,
    LoadCombination,
    Support,
    SectionProperties,
    StructuralElement,
)
from structassist.core.exceptions import InvalidAppliedLoadError, InvalidLoadCombinationError
from structassist.combinations import (
    LoadCombinationCalculator,
    ReactionSyncOptions,
    CombinationSummary,
    compute_applied_load,
    compute_load_combination,
    compute_all_combinations,
    get_combination_summary,
    get_individual_combinations,
    prepare_element_for_design,
    reaction_load_combinations,
)

__version__ = "0.1.0"
