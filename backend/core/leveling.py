"""
Gamification: experience points (XP) and levels.

Levels follow a quadratic curve so each level needs more XP than the last:

    XP required for level L = BASE_XP * L^2
    level(xp) = floor(sqrt(xp / BASE_XP)), never below 1

Total XP lives on the user profile and only ever grows through an atomic
server-side increment. This module only does the arithmetic.
"""
import logging
import math
from dataclasses import dataclass

from domain.models.training import coerce_non_negative_float, coerce_non_negative_int

logger = logging.getLogger(__name__)

BASE_XP = 250


@dataclass(frozen=True)
class LevelingConfig:
    """Shape of the level curve."""
    base_xp: float = BASE_XP


@dataclass(frozen=True)
class XPFormula:
    """Coefficients of the XP awarded for a finished session."""
    base_award: int = 100
    per_minute: int = 2
    volume_step: float = 1000
    per_volume_step: int = 5
    volume_cap: int = 100
    per_set: int = 5
    per_record: int = 50


DEFAULT_LEVELING = LevelingConfig()
DEFAULT_XP_FORMULA = XPFormula()


@dataclass
class LevelState:
    """Where a total XP value sits on the level curve."""
    level: int
    xp_at_level_start: float
    xp_at_next_level: float
    progress_fraction: float  # 0.0 - 1.0


@dataclass
class XPGainResult:
    """Outcome of adding XP to a total."""
    total_xp_after: float
    leveled_up: bool
    new_level: int
    previous_level: int


def level_for_xp(xp: float, config: LevelingConfig = DEFAULT_LEVELING) -> int:
    """
    Get the level for a total XP value.

    Args:
        xp: Total accumulated XP (bad values count as 0)
        config: Level curve

    Returns:
        Level, at least 1
    """
    xp = coerce_non_negative_float(xp)
    level = int(math.floor(math.sqrt(xp / config.base_xp)))

    # Float sqrt can land a hair off at exact boundaries
    while config.base_xp * (level + 1) ** 2 <= xp:
        level += 1
    while level > 0 and config.base_xp * level ** 2 > xp:
        level -= 1

    return max(1, level)


def xp_at_level_start(level: int, config: LevelingConfig = DEFAULT_LEVELING) -> float:
    """XP at which a level begins."""
    return config.base_xp * level ** 2


def xp_at_next_level(level: int, config: LevelingConfig = DEFAULT_LEVELING) -> float:
    """XP at which the level after `level` begins."""
    return config.base_xp * (level + 1) ** 2


def level_state(total_xp: float, config: LevelingConfig = DEFAULT_LEVELING) -> LevelState:
    """
    Describe a total XP value for profile display.

    Below the first threshold the level is still 1 and progress is clamped
    to 0, so a brand new profile shows level 1 at 0%.

    Args:
        total_xp: Total accumulated XP
        config: Level curve

    Returns:
        LevelState with progress_fraction in [0, 1]
    """
    xp = coerce_non_negative_float(total_xp)
    level = level_for_xp(xp, config)
    start = xp_at_level_start(level, config)
    end = xp_at_next_level(level, config)

    fraction = (xp - start) / (end - start)
    return LevelState(
        level=level,
        xp_at_level_start=start,
        xp_at_next_level=end,
        progress_fraction=min(1.0, max(0.0, fraction)),
    )


def apply_xp_gain(
    total_xp_before: float,
    gained: float,
    config: LevelingConfig = DEFAULT_LEVELING,
) -> XPGainResult:
    """
    Add XP to a total and detect a level up.

    Negative gains are not valid; they are treated as 0.

    Args:
        total_xp_before: Total XP before the gain
        gained: XP earned
        config: Level curve

    Returns:
        XPGainResult
    """
    before = coerce_non_negative_float(total_xp_before)
    amount = coerce_non_negative_float(gained)
    if amount != gained:
        logger.warning(f"Invalid XP gain {gained!r}, using {amount}")

    after = before + amount
    previous_level = level_for_xp(before, config)
    new_level = level_for_xp(after, config)

    return XPGainResult(
        total_xp_after=after,
        leveled_up=new_level > previous_level,
        new_level=new_level,
        previous_level=previous_level,
    )


def session_xp(
    duration_minutes: int,
    total_volume: float,
    completed_set_count: int,
    new_record_count: int,
    formula: XPFormula = DEFAULT_XP_FORMULA,
) -> int:
    """
    XP earned for a finished session.

    base + per_minute * minutes + min(cap, floor(volume / step) * per_step)
    + per_set * completed sets + per_record * new PRs

    Args:
        duration_minutes: Session length
        total_volume: Weight x reps over completed sets
        completed_set_count: Completed sets in the session
        new_record_count: Personal records beaten in the session
        formula: XP coefficients

    Returns:
        XP to award
    """
    volume_bonus = min(
        formula.volume_cap,
        int(math.floor(coerce_non_negative_float(total_volume) / formula.volume_step)) * formula.per_volume_step,
    )
    return (
        formula.base_award
        + formula.per_minute * coerce_non_negative_int(duration_minutes)
        + volume_bonus
        + formula.per_set * coerce_non_negative_int(completed_set_count)
        + formula.per_record * coerce_non_negative_int(new_record_count)
    )
