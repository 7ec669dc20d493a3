from __future__ import annotations

from typing import Sequence

from rreftools import config

Matrix = Sequence[Sequence[float]]


def pivot_column(row: Sequence[float], tol: float | None = None) -> int | None:
    """Index of the first entry with |v| > tol, or None."""
    tol = config.check_tol(tol)
    for i, v in enumerate(row):
        if abs(v) > tol:
            return i
    return None


def pivot_columns(M: Matrix, tol: float | None = None) -> list[int | None]:
    return [pivot_column(row, tol) for row in M]


def is_row_echelon(M: Matrix, tol: float | None = None) -> bool:
    """
    True iff all nonzero rows precede all zero rows and pivot columns
    strictly increase down the nonzero rows.
    """
    seen_zero = False
    prev = -1
    for p in pivot_columns(M, tol):
        if p is None:
            seen_zero = True
            continue
        if seen_zero or p <= prev:
            return False
        prev = p
    return True


def is_reduced_row_echelon(M: Matrix, tol: float | None = None) -> bool:
    """Row echelon, every pivot is 1 and is the only nonzero in its column."""
    if not is_row_echelon(M, tol):
        return False
    t = config.check_tol(tol)
    for i, p in enumerate(pivot_columns(M, tol)):
        if p is None:
            continue
        if abs(M[i][p] - 1.0) > t:
            return False
        for j in range(len(M)):
            if j != i and abs(M[j][p]) > t:
                return False
    return True


def rank(M: Matrix, tol: float | None = None) -> int:
    """Rank from the pivot structure of the reduced form."""
    from rreftools.reducer import Reducer

    return Reducer(M, zero_tol=tol).rank
