# Load combination engine and reaction synchronisation
from .load_combinations import (
    LoadCombinationCalculator,
    compute_applied_load,
    compute_load_combination,
    find_active_factor,
    format_combination_equation,
)
from .combination_ids import generate_combination_id, ensure_combination_ids
from .reaction_sync import (
    CombinationSummary,
    ReactionSyncOptions,
    build_individual_combination,
    get_combination_summary,
    get_individual_combinations,
    reaction_load_combinations,
)
from .combination_processor import (
    compute_all_combinations,
    get_active_combinations,
    prepare_element_for_design,
)
