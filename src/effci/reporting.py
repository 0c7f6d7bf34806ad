"""Tabulation of efficiency intervals for many counts."""

from collections.abc import Iterable, Mapping
from typing import cast

import pandas as pd
from joblib import Parallel, delayed

from effci.stats.efficiency import EfficiencyInterval, efficiency_ci

COLUMNS = [
    "k",
    "n",
    "conflevel",
    "mode",
    "low",
    "high",
    "err_low",
    "err_high",
    "converged",
]


def efficiency_frame(
    counts: Iterable[tuple[int, int] | Mapping[str, int]],
    conflevel: float,
    n_jobs: int = 1,
) -> pd.DataFrame:
    """
    Computes one efficiency interval per (k, n) pair.

    Parameters:
        counts: Pairs (k, n), or mappings with keys "k" and "n".
        conflevel (float): Probability content of every interval.
        n_jobs (int): Number of parallel jobs. Each job is an independent
            efficiency_ci call.

    Returns:
        pd.DataFrame: One row per pair, in input order.
    """
    pairs = [_as_pair(c) for c in counts]
    intervals = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(efficiency_ci)(k, n, conflevel) for k, n in pairs
    )
    intervals = cast(list[EfficiencyInterval], intervals)

    rows = []
    for (k, n), ci in zip(pairs, intervals, strict=True):
        err_low, err_high = ci.errors
        rows.append(
            {
                "k": k,
                "n": n,
                "conflevel": conflevel,
                "mode": ci.mode,
                "low": ci.low,
                "high": ci.high,
                "err_low": err_low,
                "err_high": err_high,
                "converged": ci.converged,
            }
        )
    return pd.DataFrame(rows, columns=COLUMNS)


def _as_pair(count) -> tuple[int, int]:
    if isinstance(count, Mapping):
        return count["k"], count["n"]
    k, n = count
    return k, n
