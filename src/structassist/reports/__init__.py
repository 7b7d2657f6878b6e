# Report tables
from .combination_table import (
    combined_loads_dataframe,
    factor_matrix_dataframe,
    summary_dataframe,
)
