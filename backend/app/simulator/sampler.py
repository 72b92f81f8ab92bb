"""
Single-trial sampling of a team's playoff point total.
"""

import math
import random

from .models import TeamSnapshot


TWO_PI = 2.0 * math.pi


def random_normal(mean: float, std_dev: float, rng: random.Random) -> float:
    """
    Draw one value from Normal(mean, std_dev) with the Box-Muller transform.

    Args:
        mean: Distribution mean
        std_dev: Standard deviation (0 returns ``mean`` exactly)
        rng: Uniform random source

    Returns:
        The sampled value
    """
    if std_dev == 0:
        return mean

    # random() is on [0, 1); flip it to (0, 1] so log(u1) is always defined
    u1 = 1.0 - rng.random()
    u2 = 1.0 - rng.random()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(TWO_PI * u2)
    return z0 * std_dev + mean


def sample_team_total(team: TeamSnapshot, rng: random.Random) -> float:
    """
    Sample one total for a team across all of its rounds.

    Completed rounds contribute their actual scores; every slot of a pending
    round contributes an independent normal draw around its expected points.
    The snapshot is assumed to have passed ``TeamSnapshot.validate``.

    Args:
        team: Team snapshot
        rng: Uniform random source

    Returns:
        Sampled total points
    """
    total = 0.0

    for round_data in team.rounds:
        if round_data.is_completed:
            total += round_data.actual_total()
            continue

        for expected_pts, variance in zip(round_data.expected_points, round_data.variance):
            total += random_normal(expected_pts, math.sqrt(variance), rng)

    return total
