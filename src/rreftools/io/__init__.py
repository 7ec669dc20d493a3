from .text import (
    iter_lines,
    tokenize,
    parse_number,
    parse_tokens,
    read_matrix,
    format_entry,
    format_matrix,
)

__all__ = [
    "iter_lines",
    "tokenize",
    "parse_number",
    "parse_tokens",
    "read_matrix",
    "format_entry",
    "format_matrix",
]
