"""Tabular views of load combinations and their combined loads."""

import pandas as pd

from structassist.combinations.load_combinations import (
    compute_load_combination,
    find_active_factor,
    format_combination_equation,
)
from structassist.combinations.reaction_sync import CombinationSummary, get_combination_summary
from structassist.core.data_models import LoadCaseType, LoadType, StructuralElement


def combined_loads_dataframe(element: StructuralElement) -> pd.DataFrame:
    """Combined loads of every active combination, one row per applied load.

    Magnitudes are converted from N (N/m) to kN (kN/m). Non-empty cached
    ``computed_result`` values are used when present.
    """
    rows = []
    for combination in element.load_combinations:
        if not combination.active:
            continue
        combined = combination.computed_result
        if not combined:
            combined = compute_load_combination(element.applied_loads, combination)

        for index, load in enumerate(combined, start=1):
            unit = "kN" if load.type == LoadType.POINT_LOAD else "kN/m"
            start = load.magnitude[0] / 1000.0 if load.magnitude else 0.0
            end = load.magnitude[1] / 1000.0 if len(load.magnitude) > 1 else start
            rows.append({
                "Combination": combination.name,
                "Equation": format_combination_equation(combination),
                "Load": index,
                "Type": load.type.value,
                "Position (m)": " - ".join(load.position),
                "Start": start,
                "End": end,
                "Unit": unit,
            })

    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.set_index(["Combination", "Load"])
    return df


def factor_matrix_dataframe(element: StructuralElement) -> pd.DataFrame:
    """Effective factors (factor x term factor) per combination and load case.

    One row per combination in element order, with ``Id`` and ``Combination``
    columns, so combinations sharing a name keep separate rows. Each cell uses
    the same active factor row the engine applies; load cases absent from a
    combination show as 0.
    """
    load_case_columns = [lc.value for lc in LoadCaseType]
    rows = []
    for combination in element.load_combinations:
        row = {"Id": combination.id, "Combination": combination.name}
        for lc in LoadCaseType:
            load_case_factor = find_active_factor(combination, lc)
            row[lc.value] = load_case_factor.combined_factor if load_case_factor else 0.0
        rows.append(row)

    df = pd.DataFrame(rows, columns=["Id", "Combination"] + load_case_columns)
    # Drop load cases unused by every combination
    if not df.empty:
        unused = [c for c in load_case_columns if (df[c] == 0.0).all()]
        df = df.drop(columns=unused)
    return df


def summary_dataframe(element: StructuralElement) -> pd.DataFrame:
    """Load case coverage table built from the combination summary."""
    summary: CombinationSummary = get_combination_summary(element)
    missing = set(summary.missing_individual_combinations)
    df = pd.DataFrame(
        [
            {"Load Case": lc.value, "Individual Combination": lc not in missing}
            for lc in summary.load_case_types
        ],
        columns=["Load Case", "Individual Combination"],
    )
    df.attrs["total_combinations"] = summary.total_combinations
    df.attrs["multi_factor_combinations"] = summary.multi_factor_combinations
    return df.set_index("Load Case")
