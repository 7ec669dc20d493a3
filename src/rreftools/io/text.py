"""Text collaborators of the reducer: line reader, tokenizer, numeric parser.

Text format: one matrix row per line, entries separated by runs of
whitespace. The first line fixes the width; every later line must match.
"""
from __future__ import annotations

import logging
import math
import os
import re
from typing import IO, Iterator, Sequence, Union

from rreftools import config
from rreftools.errors import EmptyInputError, InvalidInputError, IOFailureError

logger = logging.getLogger(__name__)

TextSource = Union[str, "os.PathLike[str]", IO[str]]

# Longest prefix C atof accepts: hex float, inf/infinity, nan, or decimal.
_ATOF_PREFIX_RE = re.compile(
    r"\s*(?P<sign>[+-]?)(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|(?P<special>inf(?:inity)?|nan(?:\([0-9a-z_]*\))?)"
    r"|(?P<dec>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)"
    r")",
    re.IGNORECASE,
)


def iter_lines(source: TextSource) -> Iterator[str]:
    """
    Yield the lines of a path or an open text stream, newline stripped.

    Read failures surface as IOFailureError, never as a silent end of input.
    """
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "r", encoding="utf-8") as fh:
                yield from _iter_stream(fh, name=os.fspath(source))
        except OSError as e:
            if isinstance(e, IOFailureError):
                raise
            raise IOFailureError(f"cannot read {os.fspath(source)!r}: {e}") from e
    else:
        yield from _iter_stream(source, name=getattr(source, "name", "<stream>"))


def _iter_stream(fh: IO[str], *, name: str) -> Iterator[str]:
    it = iter(fh)
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailureError(f"read error in {name!r}: {e}") from e
        yield line.rstrip("\r\n")


def tokenize(line: str) -> list[str]:
    """Split a line on runs of whitespace. A blank line gives []."""
    return line.split()


def parse_number(token: str, *, lenient: bool | None = None) -> float:
    """
    Convert one token to float.

    Strict mode raises InvalidInputError on anything float() rejects.
    Lenient mode behaves like C atof: the longest leading numeric prefix
    (decimal, hex float, inf or nan) is used and text without one parses
    as 0.0.
    Non-finite values are rejected in both modes.
    """
    if lenient is None:
        lenient = config.LENIENT_PARSE

    if lenient:
        value = _atof(token)
    else:
        try:
            value = float(token)
        except ValueError:
            raise InvalidInputError(f"not a number: {token!r}") from None

    if not math.isfinite(value):
        raise InvalidInputError(f"non-finite entry: {token!r}")
    return value


def _atof(token: str) -> float:
    m = _ATOF_PREFIX_RE.match(token)
    if not m:
        return 0.0
    sign = m.group("sign")
    if m.group("hex"):
        try:
            return float.fromhex(sign + m.group("hex"))
        except OverflowError:
            return math.inf
    if m.group("special"):
        return float(sign + m.group("special").split("(")[0])
    return float(sign + m.group("dec"))


def parse_tokens(tokens: Sequence[str], *, lenient: bool | None = None) -> list[float]:
    return [parse_number(t, lenient=lenient) for t in tokens]


def read_matrix(source: TextSource, *, lenient: bool | None = None) -> list[list[float]]:
    """
    Load a whole matrix from a text source.

    Raises:
      EmptyInputError   no lines, or a line without tokens
      InvalidInputError a line whose token count differs from the first line
      IOFailureError    the source could not be read
    """
    rows: list[list[float]] = []
    width = -1

    for lineno, line in enumerate(iter_lines(source), start=1):
        tokens = tokenize(line)
        if not tokens:
            raise EmptyInputError(f"line {lineno}: empty row")
        if width == -1:
            width = len(tokens)
        elif len(tokens) != width:
            raise InvalidInputError(
                f"line {lineno}: expected {width} entries, got {len(tokens)}"
            )
        try:
            rows.append(parse_tokens(tokens, lenient=lenient))
        except InvalidInputError as e:
            raise InvalidInputError(f"line {lineno}: {e}") from e

    if not rows:
        raise EmptyInputError("no data")

    logger.debug("read %dx%d matrix", len(rows), width)
    return rows


def format_entry(value: float, eps: float | None = None) -> str:
    if eps is None:
        eps = config.DISPLAY_EPS
    return f"{0.0 if abs(value) < eps else value:.2f}"


def format_matrix(rows: Sequence[Sequence[float]], eps: float | None = None) -> str:
    """
    One line per row, two decimals per entry; entries with |v| < eps are
    shown as 0.00. Stored values are not touched.
    """
    return "\n".join(" ".join(format_entry(v, eps) for v in row) for row in rows)
