from .checks import (
    pivot_column,
    pivot_columns,
    is_row_echelon,
    is_reduced_row_echelon,
    rank,
)

__all__ = [
    "pivot_column",
    "pivot_columns",
    "is_row_echelon",
    "is_reduced_row_echelon",
    "rank",
]
