"""
Estimated one-rep max (1RM).

The strength score used for personal records and progress charts. Uses the
Epley formula, which behaves well across rep ranges:

    1RM = weight * (1 + reps / 30)

A single rep is its own max, and a set with no weight or no reps scores 0.
"""
from typing import Any

from domain.models.training import coerce_non_negative_float, coerce_non_negative_int


def clean_weight(weight: Any) -> float:
    """Sanitize a weight value (negative, NaN or non-numeric -> 0.0)."""
    return coerce_non_negative_float(weight)


def clean_reps(reps: Any) -> int:
    """Sanitize a rep count (negative, NaN or non-numeric -> 0)."""
    return coerce_non_negative_int(reps)


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """
    Calculate estimated 1RM using the Epley formula.

    Full precision is returned so that record comparisons never see false
    ties; use rounded_one_rep_max() for display.

    Args:
        weight: Weight lifted
        reps: Number of reps completed

    Returns:
        Estimated 1RM, 0.0 when no lift was performed
    """
    weight = clean_weight(weight)
    reps = clean_reps(reps)

    if weight == 0 or reps == 0:
        return 0.0
    if reps == 1:
        return weight

    return weight * (1.0 + reps / 30.0)


def rounded_one_rep_max(weight: float, reps: int, ndigits: int = 0) -> float:
    """
    Estimated 1RM rounded for display (whole units by default).

    Args:
        weight: Weight lifted
        reps: Number of reps completed
        ndigits: Decimal places to keep

    Returns:
        Rounded estimated 1RM
    """
    return float(round(estimate_one_rep_max(weight, reps), ndigits))
