"""Integer, sorting and small dense-matrix helpers."""

from __future__ import annotations

from collections.abc import Sequence

Matrix = list[list[float]]

_LOWEST = -2e22


def ipow(base: int, exp: int) -> int:
    """Integer power by repeated squaring."""
    if exp < 0:
        raise ValueError("exponent must be non-negative")
    result = 1
    while exp:
        if exp & 1:
            result *= base
        exp >>= 1
        base *= base
    return result


def _digit(value: int) -> str:
    if 0 <= value <= 9:
        return chr(value + ord("0"))
    return chr(value - 10 + ord("A"))


def to_base(number: int, base: int) -> str:
    """Digits of a positive ``number`` in ``base``; zero or less gives ''."""
    if base < 2:
        raise ValueError("base must be at least 2")
    digits = []
    while number > 0:
        number, remainder = divmod(number, base)
        digits.append(_digit(remainder))
    return "".join(reversed(digits))


def arg_max_sort(values: Sequence[float]) -> tuple[list[float], list[int]]:
    """Sort descending (stable); return the sorted values and original indices."""
    order = sorted(range(len(values)), key=values.__getitem__, reverse=True)
    return [values[i] for i in order], order


def inner_sum(values: Sequence[int]) -> int:
    """Sum of all components, as an integer."""
    return int(sum(values))


def max_off_diagonal(matrix: Sequence[Sequence[float]]) -> float:
    """Largest entry outside the main diagonal (-2e22 if there is none)."""
    return max(
        (x for i, row in enumerate(matrix) for j, x in enumerate(row) if i != j),
        default=_LOWEST,
    ) if matrix else _LOWEST


def multiply_square_matrices(
    a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]
) -> Matrix:
    """Product of two square matrices."""
    columns = list(zip(*b))
    return [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a]


def matrix_power(matrix: Sequence[Sequence[float]], exponent: int) -> Matrix:
    """``matrix`` raised to ``exponent``; exponents below 2 give a copy."""
    result = [list(row) for row in matrix]
    for _ in range(exponent - 1):
        result = multiply_square_matrices(result, matrix)
    return result