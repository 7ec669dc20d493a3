"""A single matrix row that tracks its own pivot position.

Rows sort into echelon candidate order with ``compare_rows``:

  - a zero row is smaller than every nonzero row, and equal to other zero rows
  - nonzero rows compare by pivot column only; two rows with the same pivot
    column are *equal for ordering* even if their trailing entries differ

The second rule only decides where a row goes in the sort and says nothing
about row contents, so ``Row`` does not define rich comparison operators.

Every mutating operation recomputes the pivot metadata before returning.

Zero tolerance is relative to the terms being combined: an entry produced by
``k*a + b`` is stored as 0.0 only when |k*a + b| <= zero_tol * max(|k*a|, |b|),
i.e. when the addition cancelled. Scaling never creates zeros, and an entry
is never zeroed merely for being small.
"""
from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Iterable, Iterator, Sequence

from rreftools import config
from rreftools.errors import EmptyInputError, InvalidInputError, NumericDegeneracyError
from rreftools.io.text import format_entry, parse_tokens


def _to_entry(v, index: int) -> float:
    if isinstance(v, (str, bytes)):
        raise InvalidInputError(f"entry {index} is text, not a number: {v!r}")
    try:
        x = float(v)
    except (TypeError, ValueError):
        raise InvalidInputError(f"entry {index} is not a number: {v!r}") from None
    if not math.isfinite(x):
        raise InvalidInputError(f"entry {index} is non-finite: {x!r}")
    return x


def _combine(ka: float, b: float, tol: float) -> float:
    """ka + b, or exact 0.0 when the sum is a cancellation residue."""
    c = ka + b
    if abs(c) <= tol * max(abs(ka), abs(b)):
        return 0.0
    return c


class Row:
    __slots__ = ("_values", "_width", "_tol", "_pivot")

    def __init__(
        self,
        values: Sequence[float],
        width: int | None = None,
        *,
        zero_tol: float | None = None,
    ):
        if values is None:
            raise InvalidInputError("row buffer is None")
        vals = [_to_entry(v, i) for i, v in enumerate(values)]
        if width is None:
            width = len(vals)
        if width <= 0 or not vals:
            raise InvalidInputError("empty row")
        if len(vals) != width:
            raise InvalidInputError(f"row has {len(vals)} entries, expected {width}")

        self._values: list[float] = vals
        self._width: int = width
        self._tol: float = config.check_tol(zero_tol)
        self._pivot: int | None = None
        self.refresh_pivot()

    @classmethod
    def from_tokens(
        cls,
        tokens: Sequence[str],
        width: int,
        *,
        lenient: bool | None = None,
        zero_tol: float | None = None,
    ) -> "Row":
        """Build a row from whitespace-split text tokens."""
        if len(tokens) == 0:
            raise EmptyInputError("empty row")
        if len(tokens) != width:
            raise InvalidInputError(f"row has {len(tokens)} entries, expected {width}")
        return cls(parse_tokens(tokens, lenient=lenient), width, zero_tol=zero_tol)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def refresh_pivot(self) -> None:
        """Locate the first nonzero entry (None if there is none)."""
        pivot = None
        for i, v in enumerate(self._values):
            if v != 0:
                pivot = i
                break
        self._pivot = pivot

    @property
    def width(self) -> int:
        return self._width

    @property
    def zero_tol(self) -> float:
        return self._tol

    @property
    def pivot_column(self) -> int | None:
        """Index of the leading nonzero entry, None for a zero row."""
        return self._pivot

    @property
    def is_zero(self) -> bool:
        return self._pivot is None

    def is_nonzero(self) -> bool:
        return self._pivot is not None

    def sort_key(self) -> tuple[int, int]:
        """Tuple key equivalent to compare_rows."""
        if self._pivot is None:
            return (0, 0)
        return (1, self._pivot)

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._width

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __getitem__(self, i: int) -> float:
        return self._values[i]

    def __setitem__(self, i: int, value: float) -> None:
        self._values[i] = _to_entry(value, i)
        self.refresh_pivot()

    def to_list(self) -> list[float]:
        return list(self._values)

    # ------------------------------------------------------------------
    # Elementary operations (all in place)
    # ------------------------------------------------------------------

    def _check_width(self, other: "Row") -> None:
        if other._width != self._width:
            raise InvalidInputError(
                f"row width mismatch: {self._width} vs {other._width}"
            )

    def _check_finite(self) -> None:
        for v in self._values:
            if not math.isfinite(v):
                raise NumericDegeneracyError(f"non-finite value {v!r} in row")

    def scale(self, k: float) -> "Row":
        self._values = [v * k if v else 0.0 for v in self._values]
        self._check_finite()
        self.refresh_pivot()
        return self

    def add(self, other: "Row") -> "Row":
        self._check_width(other)
        tol = self._tol
        self._values = [_combine(a, b, tol) for a, b in zip(self._values, other._values)]
        self._check_finite()
        self.refresh_pivot()
        return self

    def divide(self, k: float) -> "Row":
        if k == 0:
            raise NumericDegeneracyError("division of a row by zero")
        self._values = [v / k if v else 0.0 for v in self._values]
        self._check_finite()
        self.refresh_pivot()
        return self

    def eliminate_using(self, other: "Row", column: int) -> "Row":
        """
        k * self + other -> self, with k = -other[column] / self[column].

        Afterwards self[column] is exactly 0.0. ``other`` is not modified.
        """
        self._check_width(other)
        own = self._values[column]
        if own == 0:
            raise NumericDegeneracyError(
                f"cannot eliminate column {column}: own entry is zero"
            )
        k = -other._values[column] / own
        tol = self._tol
        self._values = [_combine(k * a, b, tol) for a, b in zip(self._values, other._values)]
        self._values[column] = 0.0
        self._check_finite()
        self.refresh_pivot()
        return self

    def normalize(self) -> "Row":
        """Scale so the pivot entry is exactly 1.0. No-op on a zero row."""
        p = self._pivot
        if p is None:
            return self
        self.divide(self._values[p])
        self._values[p] = 1.0
        self.refresh_pivot()
        return self

    # ------------------------------------------------------------------
    # Copying / display
    # ------------------------------------------------------------------

    def copy(self) -> "Row":
        new = Row.__new__(Row)
        new._values = list(self._values)
        new._width = self._width
        new._tol = self._tol
        new._pivot = self._pivot
        return new

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Row":
        return self.copy()

    def format(self, eps: float | None = None) -> str:
        return " ".join(format_entry(v, eps) for v in self._values)

    def __repr__(self) -> str:
        return f"Row({self._values!r}, pivot_column={self._pivot!r})"


def compare_rows(a: Row, b: Row) -> int:
    """Three-way comparison: zero rows first, then by pivot column."""
    if a.is_zero and b.is_zero:
        return 0
    if a.is_zero:
        return -1
    if b.is_zero:
        return 1
    pa, pb = a.pivot_column, b.pivot_column
    return (pa > pb) - (pa < pb)


row_sort_key = cmp_to_key(compare_rows)


def sort_rows(rows: Iterable[Row]) -> list[Row]:
    """Stable sort into echelon candidate order."""
    return sorted(rows, key=row_sort_key)
