"""Bracket-and-bisect search for the edges of a credible interval."""

from dataclasses import dataclass

from effci.stats.beta_integral import beta_ab

MAX_ITER = 50
TOLERANCE = 1e-15


@dataclass(frozen=True)
class Found:
    """The searched edge, and |integral - c| at the returned edge."""

    edge: float
    residual: float = 0.0


@dataclass(frozen=True)
class Infeasible:
    """No edge exists: the whole mass beyond the anchor is below c."""

    mass: float


SearchResult = Found | Infeasible


def search_upper(low: float, k: int, n: int, c: float) -> SearchResult:
    """
    Finds the upper edge of the interval starting at low that contains
    probability c under the Beta(k + 1, n - k + 1) posterior.

    Parameters:
        low (float): Fixed lower edge in [0, 1].
        k (int): Number of successes.
        n (int): Number of trials.
        c (float): Required probability content.

    Returns:
        Found with the upper edge, or Infeasible if even [low, 1] holds less
        than c.
    """
    integral = beta_ab(low, 1.0, k, n)
    # Exact comparison on purpose; the full interval is the solution for k = 0.
    if integral == c:
        return Found(1.0)
    if integral < c:
        return Infeasible(integral)

    too_low, too_high = low, 1.0
    test = too_high
    for _ in range(MAX_ITER):
        test = 0.5 * (too_low + too_high)
        integral = beta_ab(low, test, k, n)
        if integral > c:
            too_high = test
        else:
            too_low = test
        if abs(integral - c) <= TOLERANCE:
            break
    return Found(test, abs(integral - c))


def search_lower(high: float, k: int, n: int, c: float) -> SearchResult:
    """
    Finds the lower edge of the interval ending at high that contains
    probability c under the Beta(k + 1, n - k + 1) posterior.

    Mirror image of search_upper; returns Infeasible if even [0, high] holds
    less than c.
    """
    integral = beta_ab(0.0, high, k, n)
    if integral == c:
        return Found(0.0)
    if integral < c:
        return Infeasible(integral)

    too_low, too_high = 0.0, high
    test = too_low
    for _ in range(MAX_ITER):
        test = 0.5 * (too_high + too_low)
        integral = beta_ab(test, high, k, n)
        if integral > c:
            too_low = test
        else:
            too_high = test
        if abs(integral - c) <= TOLERANCE:
            break
    return Found(test, abs(integral - c))
