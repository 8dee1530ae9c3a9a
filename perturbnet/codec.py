"""Plain-text matrix serialization.

Format:
-------
- One matrix row per line, values separated by single spaces.
- A blank line terminates each matrix.
- Sized framing (used by dynamic networks) prefixes the matrix with a line
  holding its row count. The column count is inferred from the rows.

Blank lines are skipped on read and never count as data rows, so matrices can
be read back to back from one shared line iterator. Readers consume exactly the
lines they need.
"""

import re
from collections.abc import Iterable, Iterator
from io import TextIOBase

import numpy as np
import torch
from jaxtyping import Float
from torch import Tensor

from .errors import FormatError

FLOAT32_MAX: float = float(np.finfo(np.float32).max)
# Plain ASCII decimals with an optional exponent, as written by format_value.
DECIMAL_PATTERN: re.Pattern = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII
)


def format_value(value: float) -> str:
    """Shortest decimal text that reads back to the same float32."""
    return np.format_float_positional(np.float32(value), unique=True, trim="-")


def parse_value(token: str) -> float:
    """Parse one matrix value, rejecting anything outside finite float32."""
    if DECIMAL_PATTERN.fullmatch(token) is None:
        raise FormatError(f"Invalid number: {token!r}")
    value: float = float(token)
    if not abs(value) <= FLOAT32_MAX:
        raise FormatError(f"Value out of finite float32 range: {token!r}")
    return value


def write_matrix(
    matrix: Float[Tensor, "rows cols"],
    file: TextIOBase,
    with_row_count: bool = False,
) -> None:
    """Write a matrix followed by a blank terminator line.

    Args:
        matrix: Matrix to write
        file: Text stream to write to
        with_row_count: Prefix the matrix with its row count (sized framing)
    """
    if with_row_count:
        file.write(f"{matrix.shape[0]}\n")
    for row in matrix.tolist():
        file.write(" ".join(format_value(value) for value in row) + "\n")
    file.write("\n")


def _next_tokens(lines: Iterator[str]) -> list[str] | None:
    """Tokens of the next non-blank line, None once input is exhausted."""
    for line in lines:
        tokens: list[str] = line.split()
        if tokens:
            return tokens
    return None


def _read_rows(
    lines: Iterator[str], rows: int, cols: int | None
) -> Float[Tensor, "rows cols"]:
    data: list[list[float]] = []
    while len(data) < rows:
        tokens = _next_tokens(lines)
        if tokens is None:
            raise FormatError(f"Expected {rows} rows, input ended after {len(data)}")
        if cols is None:
            cols = len(tokens)
        if len(tokens) != cols:
            raise FormatError(
                f"Wrong number of columns in row {len(data)}: "
                f"expected {cols}, found {len(tokens)}"
            )
        data.append([parse_value(token) for token in tokens])
    return torch.tensor(data, dtype=torch.float32).reshape(rows, cols or 0)


def read_count(lines: Iterable[str]) -> int:
    """Read a non-negative integer header line (row or matrix count).

    Raises:
        FormatError: If input is exhausted or the line is not a count
    """
    tokens = _next_tokens(iter(lines))
    if tokens is None:
        raise FormatError("Missing count line")
    if len(tokens) != 1 or not (tokens[0].isascii() and tokens[0].isdigit()):
        raise FormatError(f"Bad count line: {' '.join(tokens)!r}")
    return int(tokens[0])


def read_matrix(
    lines: Iterable[str], rows: int, cols: int
) -> Float[Tensor, "rows cols"]:
    """Read a matrix of known shape.

    Args:
        lines: Line source, typically an open text file
        rows: Expected row count
        cols: Expected column count

    Returns:
        float32 matrix of shape (rows, cols)

    Raises:
        FormatError: On a wrong column count, bad number, or missing rows
    """
    return _read_rows(iter(lines), rows, cols)


def read_sized_matrix(lines: Iterable[str]) -> Float[Tensor, "rows cols"]:
    """Read a matrix written with `with_row_count=True`.

    The column count is taken from the first row. A zero-row matrix reads
    back with zero columns.

    Raises:
        FormatError: On a bad row count line or any `read_matrix` failure
    """
    lines = iter(lines)
    rows: int = read_count(lines)
    return _read_rows(lines, rows, None)
