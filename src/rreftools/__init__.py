"""
rreftools: Gauss-Jordan reduction to reduced row echelon form with
pivot-tracking rows, plus text input, result checks and plotting.
"""

import logging as _logging

from .errors import (
    RrefError,
    InvalidInputError,
    EmptyInputError,
    IOFailureError,
    NumericDegeneracyError,
)
from .row import Row, compare_rows, sort_rows
from .reducer import Reducer, rref, rref_file

# Text IO
from .io.text import read_matrix, format_matrix

# Plotting
from .viz.draw import draw_reduction

# Shared utilities
from .utils.checks import (
    pivot_column,
    pivot_columns,
    is_row_echelon,
    is_reduced_row_echelon,
    rank,
)

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    # Errors
    "RrefError",
    "InvalidInputError",
    "EmptyInputError",
    "IOFailureError",
    "NumericDegeneracyError",
    # Core
    "Row",
    "compare_rows",
    "sort_rows",
    "Reducer",
    "rref",
    "rref_file",
    # IO
    "read_matrix",
    "format_matrix",
    # Viz
    "draw_reduction",
    # Utils
    "pivot_column",
    "pivot_columns",
    "is_row_echelon",
    "is_reduced_row_echelon",
    "rank",
]
