"""Gauss-Jordan reduction driven by pivot-ordered rows.

The reducer works the way the method is done by hand:

  1. sort rows so zero rows come first and the others follow by pivot column
  2. while two adjacent rows share a pivot column, combine the lower one
     against the one above it (one sweep per pass), then re-sort
  3. once pivot columns strictly increase, clear every entry above each
     pivot and scale each pivot to 1

No pivot search is done: the row's own leading entry is always the pivot.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Sequence

from rreftools import config
from rreftools.errors import EmptyInputError, InvalidInputError, NumericDegeneracyError
from rreftools.io.text import TextSource, format_matrix, read_matrix
from rreftools.row import Row, sort_rows

logger = logging.getLogger(__name__)


class Reducer:
    """
    Owns a matrix and reduces it to RREF on construction.

    Parameters
    ----------
    matrix : sequence of sequences of float
        Row-major input. It is deep-copied; the caller keeps the original.
    width, height : int, optional
        Expected dimensions. When given they must be strictly positive and
        match the buffer.
    zero_tol : float, optional
        Relative cancellation tolerance: a combined entry counts as zero when
        it is this small relative to the terms that produced it
        (default: ``rreftools.config.ZERO_TOL``).
    reduce : bool
        Run the full reduction during construction (default). With False the
        rows are only loaded and sorted, and the steps can be driven by hand.
    """

    def __init__(
        self,
        matrix: Sequence[Sequence[float]],
        width: int | None = None,
        height: int | None = None,
        *,
        zero_tol: float | None = None,
        reduce: bool = True,
    ):
        if matrix is None:
            raise InvalidInputError("matrix is None")
        if width is not None and width <= 0:
            raise InvalidInputError(f"invalid width {width}")
        if height is not None and height <= 0:
            raise InvalidInputError(f"invalid height {height}")

        src = list(matrix)
        if not src:
            raise EmptyInputError("matrix has no rows")
        if height is not None and len(src) != height:
            raise InvalidInputError(f"expected {height} rows, got {len(src)}")
        if width is None:
            width = len(src[0])
            if width == 0:
                raise EmptyInputError("row 0 is empty")

        tol = config.check_tol(zero_tol)
        rows: list[Row] = []
        for i, r in enumerate(src):
            if r is None:
                raise InvalidInputError(f"row {i} is None")
            if len(r) != width:
                raise InvalidInputError(f"row {i} has {len(r)} entries, expected {width}")
            rows.append(Row(r, width, zero_tol=tol))

        self._width = width
        self._height = len(rows)
        self._tol = tol
        self._rows = rows
        self._first_nonzero = 0
        self._zero_matrix = False
        self._passes = 0

        logger.debug("reducing %dx%d matrix", self._height, self._width)
        self.refresh_row_info()
        if reduce:
            self.solve()

    @classmethod
    def from_text(
        cls,
        source: TextSource,
        *,
        lenient: bool | None = None,
        zero_tol: float | None = None,
    ) -> "Reducer":
        """Read a whitespace-separated matrix from a path or text stream and reduce it."""
        return cls(read_matrix(source, lenient=lenient), zero_tol=zero_tol)

    @classmethod
    def from_file(
        cls,
        path,
        *,
        lenient: bool | None = None,
        zero_tol: float | None = None,
    ) -> "Reducer":
        return cls.from_text(path, lenient=lenient, zero_tol=zero_tol)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def first_nonzero_row(self) -> int:
        """Index of the first nonzero row in working order (height if none)."""
        return self._first_nonzero

    @property
    def is_zero_matrix(self) -> bool:
        return self._zero_matrix

    @property
    def passes(self) -> int:
        """Number of elimination passes the last solve needed."""
        return self._passes

    # ------------------------------------------------------------------
    # Algorithm
    # ------------------------------------------------------------------

    def refresh_row_info(self) -> None:
        """Rescan every row, re-sort, and recompute the zero-row boundary."""
        for row in self._rows:
            row.refresh_pivot()

        self._rows = sort_rows(self._rows)

        i = 0
        while i < self._height and self._rows[i].is_zero:
            i += 1
        self._first_nonzero = i
        self._zero_matrix = i == self._height

    def is_in_echelon_form(self) -> bool:
        prev = None
        for row in self._rows[self._first_nonzero:]:
            p = row.pivot_column
            if p is None:
                return False
            if prev is not None and p <= prev:
                return False
            prev = p
        return True

    def do_elimination_pass(self) -> None:
        """
        One bottom-up sweep: a row whose pivot column equals the pivot column
        of the row just above it is combined against that row.
        """
        rows = self._rows
        for i in range(self._height - 1, self._first_nonzero, -1):
            p = rows[i].pivot_column
            if p is not None and p == rows[i - 1].pivot_column:
                rows[i].eliminate_using(rows[i - 1], p)

    def finish_to_reduced_form(self) -> None:
        """Clear every entry above each pivot, then scale each pivot to 1."""
        rows = self._rows
        start = self._first_nonzero
        for i in range(start, self._height):
            p = rows[i].pivot_column
            for j in range(start, i):
                if rows[j][p] != 0:
                    rows[j].eliminate_using(rows[i], p)

        for i in range(start, self._height):
            rows[i].normalize()

        self.refresh_row_info()

    def solve(self) -> None:
        """
        Drive the matrix to RREF.

        Each pass strictly raises the sum of pivot columns (zero rows counting
        as width), so height * width + 1 passes always suffice.
        """
        limit = self._height * self._width + 1
        self._passes = 0
        while True:
            if self._zero_matrix:
                logger.debug("zero matrix, nothing to reduce")
                break

            if self.is_in_echelon_form():
                self.finish_to_reduced_form()
                break

            if self._passes >= limit:
                raise NumericDegeneracyError(
                    f"reduction did not reach echelon form after {limit} passes"
                )
            self.do_elimination_pass()
            self._passes += 1
            self.refresh_row_info()
            logger.debug(
                "pass %d: first nonzero row %d", self._passes, self._first_nonzero
            )

        logger.info(
            "reduced %dx%d matrix in %d passes, rank %d",
            self._height,
            self._width,
            self._passes,
            self.rank,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _canonical_rows(self) -> list[Row]:
        nonzero = [r for r in self._rows if r.is_nonzero()]
        zero = [r for r in self._rows if r.is_zero]
        return nonzero + zero

    def to_list(self) -> list[list[float]]:
        """Deep copy of the RREF matrix, zero rows last."""
        return [r.to_list() for r in self._canonical_rows()]

    def internal_rows(self) -> list[Row]:
        """Copies of the rows in working order (zero rows first)."""
        return [r.copy() for r in self._rows]

    def pivot_columns(self) -> list[int]:
        return [r.pivot_column for r in self._rows if r.is_nonzero()]

    @property
    def rank(self) -> int:
        return len(self.pivot_columns())

    def format(self, eps: float | None = None) -> str:
        return format_matrix(self.to_list(), eps)

    def print_matrix(self, file: IO[str] | None = None, eps: float | None = None) -> None:
        print(self.format(eps), file=file if file is not None else sys.stdout)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Reducer(height={self._height}, width={self._width}, rank={self.rank})"

    def copy(self) -> "Reducer":
        new = Reducer.__new__(Reducer)
        new._width = self._width
        new._height = self._height
        new._tol = self._tol
        new._rows = [r.copy() for r in self._rows]
        new._first_nonzero = self._first_nonzero
        new._zero_matrix = self._zero_matrix
        new._passes = self._passes
        return new

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Reducer":
        return self.copy()


def rref(matrix: Sequence[Sequence[float]], *, zero_tol: float | None = None) -> list[list[float]]:
    """Reduced row echelon form of ``matrix`` as a new list of lists."""
    return Reducer(matrix, zero_tol=zero_tol).to_list()


def rref_file(
    source: TextSource,
    *,
    lenient: bool | None = None,
    zero_tol: float | None = None,
) -> list[list[float]]:
    """Reduced row echelon form of a matrix read from a text file or stream."""
    return Reducer.from_text(source, lenient=lenient, zero_tol=zero_tol).to_list()
