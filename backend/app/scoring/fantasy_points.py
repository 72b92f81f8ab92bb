"""
Convert a player's game stats into fantasy points.

Stat lines use the provider's field names (``PassingYards``,
``ReceivingTouchdowns``, ...). Missing, null or non-positive stats score
nothing.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ScoringRule:
    """Points per unit for one scoring category."""

    category: str
    stat_keys: Tuple[str, ...]
    points_per_unit: float
    unit_label: str


@dataclass(frozen=True)
class ScoredCategory:
    """A single category's contribution to a player's total."""

    stat: str
    calculation: str
    points: float

    def to_dict(self) -> dict:
        return {"stat": self.stat, "calculation": self.calculation, "points": self.points}


@dataclass(frozen=True)
class FantasyPoints:
    """Total fantasy points with a per-category breakdown."""

    points: float
    breakdown: Dict[str, ScoredCategory]

    def to_dict(self) -> dict:
        return {
            "points": self.points,
            "breakdown": {name: cat.to_dict() for name, cat in self.breakdown.items()}
        }


# Pool scoring: 1 pt / 25 passing yds, 1 pt / 10 rushing or receiving yds, full PPR
STANDARD_RULES: Tuple[ScoringRule, ...] = (
    ScoringRule("passing_yards", ("PassingYards",), 0.04, "yds"),
    ScoringRule("passing_tds", ("PassingTouchdowns",), 6, "TD"),
    ScoringRule("interceptions", ("Interceptions",), -2, "INT"),
    ScoringRule("rushing_yards", ("RushingYards",), 0.1, "yds"),
    ScoringRule("rushing_tds", ("RushingTouchdowns",), 6, "TD"),
    ScoringRule("receptions", ("Receptions",), 1, "rec"),
    ScoringRule("receiving_yards", ("ReceivingYards",), 0.1, "yds"),
    ScoringRule("receiving_tds", ("ReceivingTouchdowns",), 6, "TD"),
    ScoringRule("fumbles_lost", ("FumblesLost",), -2, "lost"),
    ScoringRule(
        "two_point_conversions",
        ("TwoPointConversionPasses", "TwoPointConversionRuns", "TwoPointConversionReceptions"),
        2,
        "conversions"
    ),
)


def _stat_value(stats: Mapping[str, Any], key: str) -> float:
    value = stats.get(key)
    if value is None:
        return 0
    return float(value)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def calculate_fantasy_points(
    stats: Mapping[str, Any],
    rules: Optional[Sequence[ScoringRule]] = None
) -> FantasyPoints:
    """
    Score one stat line.

    Args:
        stats: Provider stat line
        rules: Scoring rules (defaults to STANDARD_RULES)

    Returns:
        FantasyPoints with the total rounded to 2 decimals

    Raises:
        ValueError: If a stat value is not numeric
    """
    if rules is None:
        rules = STANDARD_RULES

    breakdown: Dict[str, ScoredCategory] = {}
    total = 0.0

    for rule in rules:
        try:
            amount = sum(_stat_value(stats, key) for key in rule.stat_keys)
        except (TypeError, ValueError):
            raise ValueError(f"Non-numeric stat for {rule.category}: "
                             f"{[stats.get(key) for key in rule.stat_keys]}")

        if amount <= 0:
            continue

        points = amount * rule.points_per_unit
        shown = _format_number(amount)
        breakdown[rule.category] = ScoredCategory(
            stat=f"{shown} {rule.unit_label}",
            calculation=f"{shown} × {_format_number(rule.points_per_unit)}",
            points=round(points, 2)
        )
        total += points

    return FantasyPoints(points=round(total, 2), breakdown=breakdown)
