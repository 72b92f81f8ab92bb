"""
Monte Carlo simulation engine for pool finish-position probabilities.
"""

import logging
import multiprocessing
import random
import threading
import time
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .exceptions import InvalidSnapshotError, SimulationIncompleteError
from .models import FinishTally, SimulationReport, TeamResult, TeamSnapshot
from .sampler import sample_team_total


logger = logging.getLogger(__name__)

DEFAULT_SIMULATIONS = 10000
CHECK_INTERVAL = 100
POLL_SECONDS = 0.1
TOP_N = 3


def validate_snapshots(teams: Sequence[TeamSnapshot]) -> None:
    """
    Check that the pool can be simulated.

    Raises:
        InvalidSnapshotError: If there are fewer than two teams, duplicate
            team names, or any malformed snapshot
    """
    if len(teams) < 2:
        raise InvalidSnapshotError(f"At least 2 teams are required, got {len(teams)}")

    seen = set()
    for team in teams:
        if team.team_name in seen:
            raise InvalidSnapshotError("duplicate team name", team.team_name)
        seen.add(team.team_name)
        team.validate()


def rank_totals(totals: Sequence[float]) -> List[int]:
    """Team indexes ordered by total, highest first. Equal totals keep input order."""
    return sorted(range(len(totals)), key=lambda idx: totals[idx], reverse=True)


def _run_trials(
    teams: Sequence[TeamSnapshot],
    n_simulations: int,
    rng: random.Random,
    deadline: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> FinishTally:
    """
    Run trials into a fresh tally.

    Stops early, returning a short tally, when ``deadline`` (a ``time.time()``
    value) passes or ``cancel_event`` is set. Callers compare
    ``tally.trials`` with ``n_simulations`` to detect that.
    """
    tally = FinishTally(len(teams))

    for sim_idx in range(n_simulations):
        if sim_idx % CHECK_INTERVAL == 0:
            if cancel_event is not None and cancel_event.is_set():
                break
            if deadline is not None and time.time() > deadline:
                break
            if progress_callback:
                progress_callback(sim_idx / n_simulations * 100)

        totals = [sample_team_total(team, rng) for team in teams]
        tally.record(rank_totals(totals))

    return tally


def _simulate_shard(args: Tuple[Sequence[TeamSnapshot], int, int, Optional[float], Optional[Any]]) -> FinishTally:
    """Worker entry point for one shard; must be at module level for pickling."""
    teams, n_simulations, seed, deadline, stop_event = args
    return _run_trials(teams, n_simulations, random.Random(seed), deadline=deadline, cancel_event=stop_event)


def _shard_sizes(n_simulations: int, n_workers: int) -> List[int]:
    base, extra = divmod(n_simulations, n_workers)
    return [base + (1 if i < extra else 0) for i in range(n_workers)]


def _run_sharded(
    teams: Sequence[TeamSnapshot],
    n_simulations: int,
    n_workers: int,
    rng: random.Random,
    deadline: Optional[float],
    cancel_event: Optional[threading.Event],
    progress_callback: Optional[Callable[[float], None]]
) -> FinishTally:
    """
    Split trials across worker processes and merge their tallies.

    A thread event cannot cross the process boundary, so when
    ``cancel_event`` is given the shards poll a manager-backed event that is
    set as soon as cancellation is seen here. Running shards then stop at
    their next check, the same as the deadline.
    """
    sizes = _shard_sizes(n_simulations, n_workers)
    # Each shard gets its own seed drawn from the run's source
    seeds = [rng.getrandbits(64) for _ in sizes]
    logger.debug("Sharding %d simulations across %d workers: %s", n_simulations, n_workers, sizes)

    manager = multiprocessing.Manager() if cancel_event is not None else None
    stop_event = manager.Event() if manager is not None else None
    if stop_event is not None and cancel_event.is_set():
        stop_event.set()

    tally = FinishTally(len(teams))
    executor = ProcessPoolExecutor(max_workers=n_workers)
    try:
        pending = {
            executor.submit(_simulate_shard, (list(teams), size, seed, deadline, stop_event))
            for size, seed in zip(sizes, seeds)
        }
        while pending:
            done, pending = wait(pending, timeout=POLL_SECONDS, return_when=FIRST_COMPLETED)
            for future in done:
                tally.merge(future.result())

            if cancel_event is not None and cancel_event.is_set():
                stop_event.set()
                break
            if deadline is not None and time.time() > deadline:
                break
            if progress_callback and done:
                progress_callback(tally.trials / n_simulations * 100)
    finally:
        # Running shards stop at their next deadline or stop-flag check
        if stop_event is not None:
            stop_event.set()
        executor.shutdown(wait=True, cancel_futures=True)
        if manager is not None:
            manager.shutdown()

    return tally


def calculate_expected_totals(teams: Sequence[TeamSnapshot]) -> List[float]:
    """Deterministic totals: actual points for completed rounds plus expected points for pending ones."""
    return [team.expected_total for team in teams]


def _pct(count: int, n_simulations: int) -> float:
    return round(count / n_simulations * 100, 1)


def build_results(
    teams: Sequence[TeamSnapshot],
    expected_totals: Sequence[float],
    tally: FinishTally
) -> List[TeamResult]:
    """
    Convert a finish tally into per-team results.

    Derived metrics are computed from raw counts and rounded once. Results
    are sorted by win probability, then expected total (both descending),
    then input order.
    """
    n_simulations = tally.trials
    top_n = min(TOP_N, len(teams))

    ranked = []
    for idx, team in enumerate(teams):
        counts = tally.counts[idx]
        result = TeamResult(
            team_name=team.team_name,
            expected_total=round(expected_totals[idx], 1),
            finish_counts=list(counts),
            finish_probabilities=[_pct(count, n_simulations) for count in counts],
            win_probability=_pct(counts[0], n_simulations),
            top3_probability=_pct(sum(counts[:top_n]), n_simulations),
            last_place_probability=_pct(counts[-1], n_simulations)
        )
        ranked.append(((-counts[0], -expected_totals[idx], idx), result))

    ranked.sort(key=lambda item: item[0])
    return [result for _, result in ranked]


def calculate_win_probabilities(
    teams: Sequence[TeamSnapshot],
    n_simulations: int = DEFAULT_SIMULATIONS,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    n_workers: int = 1,
    timeout: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> List[TeamResult]:
    """
    Run a Monte Carlo simulation of the pool's final standings.

    Each trial samples every team's total independently, ranks the totals
    and records each team's finish position.

    Args:
        teams: Team snapshots, in input order
        n_simulations: Number of trials to run
        rng: Random source to draw from (``random.Random`` compatible)
        seed: Seed for a fresh ``random.Random`` when ``rng`` is not given.
            With neither, system entropy is used.
        n_workers: Worker processes to shard trials across. With more than
            one, ``rng`` only supplies the per-shard seeds.
        timeout: Seconds before the run is abandoned
        cancel_event: Event that abandons the run when set
        progress_callback: Optional callback for progress updates (receives percent complete)

    Returns:
        Per-team results sorted by win probability

    Raises:
        InvalidSnapshotError: If the snapshots cannot be simulated
        SimulationIncompleteError: If the run was cancelled or timed out
    """
    if n_simulations < 1:
        raise InvalidSnapshotError(f"n_simulations must be positive, got {n_simulations}")
    if n_workers < 1:
        raise ValueError(f"n_workers must be positive, got {n_workers}")

    validate_snapshots(teams)
    expected_totals = calculate_expected_totals(teams)

    if rng is None:
        rng = random.Random(seed) if seed is not None else random.SystemRandom()

    deadline = time.time() + timeout if timeout is not None else None
    n_workers = min(n_workers, n_simulations)

    logger.info("Simulating %d teams x %d simulations (%d workers)", len(teams), n_simulations, n_workers)
    started = time.perf_counter()

    if n_workers > 1:
        tally = _run_sharded(teams, n_simulations, n_workers, rng, deadline, cancel_event, progress_callback)
    else:
        tally = _run_trials(teams, n_simulations, rng, deadline, cancel_event, progress_callback)

    if tally.trials < n_simulations:
        reason = "Simulation cancelled" if cancel_event is not None and cancel_event.is_set() else "Simulation timed out"
        logger.warning("%s after %d of %d simulations", reason, tally.trials, n_simulations)
        raise SimulationIncompleteError(reason, completed=tally.trials, requested=n_simulations)

    if progress_callback:
        progress_callback(100)

    logger.info("Simulation finished in %.2fs", time.perf_counter() - started)
    return build_results(teams, expected_totals, tally)


def simulate_pool(
    teams: Sequence[TeamSnapshot],
    n_simulations: int = DEFAULT_SIMULATIONS,
    **kwargs
) -> SimulationReport:
    """Run ``calculate_win_probabilities`` and stamp the results with provenance."""
    results = calculate_win_probabilities(teams, n_simulations, **kwargs)
    return SimulationReport(
        teams=results,
        n_simulations=n_simulations,
        generated_at=datetime.now(timezone.utc)
    )
