"""Shortest Bayesian confidence interval for a binomial efficiency.

The posterior of an efficiency measured as k passed out of n trials, under a
flat prior, is Beta(k + 1, n - k + 1). The interval returned by efficiency_ci is
the shortest one containing the requested probability content. When k = 0 or
k = n the posterior is monotone and the interval touches 0 or 1; otherwise the
lower edge is found with Brent's method by minimizing the interval length.

Follows TGraphAsymmErrors::BayesDivide from ROOT (M. Paterno, FNAL).
"""

import logging
import math
import operator
from dataclasses import dataclass
from typing import NamedTuple

from effci.optimize.brent import brent
from effci.stats.search import Found, SearchResult, search_lower, search_upper

logger = logging.getLogger(__name__)

# Returned to the minimizer for lower edges that admit no interval.
TOO_LARGE = 2.0
BRACKET = (0.0, 0.5, 1.0)
BRENT_TOL = 1.0e-9


class InvalidArgumentError(ValueError):
    pass


class EfficiencyInterval(NamedTuple):
    mode: float
    low: float
    high: float
    converged: bool = True

    @property
    def errors(self) -> tuple[float, float]:
        """Asymmetric error bars (mode - low, high - mode)."""
        return self.mode - self.low, self.high - self.mode

    @property
    def length(self) -> float:
        return self.high - self.low


@dataclass(frozen=True)
class IntervalObjective:
    """Length of the interval starting at a given lower edge, for fixed counts."""

    k: int
    n: int
    conflevel: float

    def length(self, low: float) -> float | None:
        """
        Returns the length of the interval starting at low that contains
        conflevel of the posterior, or None if [low, 1] holds less than that.
        """
        result = search_upper(low, self.k, self.n, self.conflevel)
        if isinstance(result, Found):
            return result.edge - low
        return None

    def __call__(self, low: float) -> float:
        length = self.length(low)
        # so that an infeasible start is never the shortest interval
        return TOO_LARGE if length is None else length


def efficiency_ci(k: int, n: int, conflevel: float) -> EfficiencyInterval:
    """
    Computes the posterior mode and the shortest interval [low, high] holding
    probability conflevel for an efficiency of k successes in n trials.

    Parameters:
        k (int): Number of successes, 0 <= k <= n.
        n (int): Number of trials, n >= 0.
        conflevel (float): Probability content, strictly between 0 and 1.

    Returns:
        EfficiencyInterval: mode, low and high. With no trials the flat prior is
        returned as (0.5, 0.0, 1.0). converged is False only if the minimizer
        hit its iteration cap.

    Raises:
        InvalidArgumentError: If the counts or conflevel are out of range.
    """
    k, n, conflevel = _validate(k, n, conflevel)

    if n == 0:
        return EfficiencyInterval(0.5, 0.0, 1.0)

    mode = k / n

    if k == 0:
        high = _edge(search_upper(0.0, k, n, conflevel), k, n, conflevel)
        logger.debug("k=0, n=%s: upper edge %s", n, high)
        return EfficiencyInterval(mode, 0.0, high)

    if k == n:
        low = _edge(search_lower(1.0, k, n, conflevel), k, n, conflevel)
        logger.debug("k=n=%s: lower edge %s", n, low)
        return EfficiencyInterval(mode, low, 1.0)

    objective = IntervalObjective(k, n, conflevel)
    result = brent(objective, *BRACKET, tol=BRENT_TOL)
    low = result.xmin
    length = objective.length(low)
    if length is None:
        raise RuntimeError(
            f"Minimizer ended on an infeasible lower edge {low} for k={k}, n={n}"
        )
    return EfficiencyInterval(mode, low, low + length, result.converged)


def _edge(result: SearchResult, k: int, n: int, conflevel: float) -> float:
    if not isinstance(result, Found):
        raise RuntimeError(
            f"No interval with content {conflevel} for k={k}, n={n} "
            f"(available mass {result.mass})"
        )
    return result.edge


def _validate(k, n, conflevel) -> tuple[int, int, float]:
    if isinstance(k, bool) or isinstance(n, bool):
        raise InvalidArgumentError("Counts must be integers, not booleans.")
    try:
        k = operator.index(k)
        n = operator.index(n)
    except TypeError as e:
        raise InvalidArgumentError(
            f"Counts must be integers, got k={k!r}, n={n!r}."
        ) from e
    if n < 0:
        raise InvalidArgumentError(f"Number of trials must be >= 0, got n={n}.")
    if not 0 <= k <= n:
        raise InvalidArgumentError(f"Expected 0 <= k <= n, got k={k}, n={n}.")

    try:
        conflevel = float(conflevel)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Confidence level must be a real number, got {conflevel!r}."
        ) from e
    if not (math.isfinite(conflevel) and 0.0 < conflevel < 1.0):
        raise InvalidArgumentError(
            f"Confidence level must lie in (0, 1), got {conflevel}."
        )
    return k, n, conflevel
