# Core data models and constants
from .data_models import (
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
from .exceptions import InvalidAppliedLoadError, InvalidLoadCombinationError
