"""Conditional moves and conditional equality moves.

Values are non-negative integers, or sequences of them for the equality
operations.  Conditions are single bytes (0 to 255).  The selection is done
with bit masks rather than branches on the condition.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

Value = Union[int, Sequence]


def _check_condition(condition: int) -> int:
    if not 0 <= condition <= 0xFF:
        raise ValueError("condition must be a byte value (0 to 255)")
    return condition


def _check_value(value: int) -> int:
    if value < 0:
        raise ValueError("value must not be negative")
    return value


def _is_non_zero(condition: int) -> int:
    """Return 1 if ``condition`` is non-zero, else 0."""
    negated = (-condition) & 0xFFFF_FFFF_FFFF_FFFF
    return ((condition | negated) >> 63) & 1


def _select(current: int, value: int, take_value: int) -> int:
    mask = take_value - 1  # 0 to take ``value``, -1 (all ones) to keep ``current``
    return (current & mask) | (value & ~mask)


def cmovnz(current: int, value: int, condition: int) -> int:
    """Return ``value`` if ``condition`` is non-zero, else ``current``."""
    _check_condition(condition)
    _check_value(current)
    _check_value(value)
    return _select(current, value, _is_non_zero(condition))


def cmovz(current: int, value: int, condition: int) -> int:
    """Return ``value`` if ``condition`` is zero, else ``current``."""
    _check_condition(condition)
    _check_value(current)
    _check_value(value)
    return _select(current, value, 1 ^ _is_non_zero(condition))


def _differs(lhs: int, rhs: int) -> int:
    diff = _check_value(lhs) ^ _check_value(rhs)
    return int(diff != 0)


def cmoveq(lhs: Value, rhs: Value, input: int, output: int) -> int:
    """Return ``input`` if ``lhs`` equals ``rhs``, else ``output``.

    Sequences are equal when they have the same length and equal elements.
    """
    _check_condition(input)
    _check_condition(output)
    if isinstance(lhs, int) and isinstance(rhs, int):
        return _select(output, input, 1 ^ _differs(lhs, rhs))
    same = cmovne(lhs, rhs, 0, 1)
    return cmoveq(same, 1, input, output)


def cmovne(lhs: Value, rhs: Value, input: int, output: int) -> int:
    """Return ``input`` if ``lhs`` differs from ``rhs``, else ``output``.

    Sequences of different lengths always differ.
    """
    _check_condition(input)
    _check_condition(output)
    if isinstance(lhs, int) and isinstance(rhs, int):
        return _select(output, input, _differs(lhs, rhs))
    if isinstance(lhs, int) or isinstance(rhs, int):
        raise TypeError("cannot compare an integer with a sequence")
    if len(lhs) != len(rhs):
        return input
    for a, b in zip(lhs, rhs):
        output = cmovne(a, b, input, output)
    return output