"""Decimal arithmetic context shared by ledger computations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow, localcontext


@contextmanager
def domain_decimal_context() -> Iterator[None]:
    """Run decimal arithmetic without signalling traps.

    Inside this context invalid operations yield NaN, overflows and divisions
    by zero yield signed infinities, and ordering comparisons involving NaN
    evaluate to False instead of raising.

    Returns:
        Iterator[None]: Context manager scope.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    with localcontext() as context:
        context.traps[InvalidOperation] = False
        context.traps[Overflow] = False
        context.traps[DivisionByZero] = False
        yield


def domain_split_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return `numerator / denominator` with non-finite results instead of errors."""

    with domain_decimal_context():
        return numerator / denominator


__all__ = ["domain_decimal_context", "domain_split_ratio"]
