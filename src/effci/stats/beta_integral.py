"""Probability mass of the binomial efficiency posterior."""

from scipy.special import betainc


def beta_ab(x: float, y: float, k: int, n: int) -> float:
    """
    Computes the mass of Beta(k + 1, n - k + 1) between x and y.

    This is the integral of t^k (1 - t)^(n - k) over [x, y], normalized so that
    the integral over [0, 1] is one.

    Parameters:
        x (float): Lower integration limit in [0, 1].
        y (float): Upper integration limit in [0, 1].
        k (int): Number of successes.
        n (int): Number of trials.

    Returns:
        float: The posterior probability of the efficiency lying in [x, y].
    """
    a = k + 1.0
    b = n - k + 1.0
    return float(betainc(a, b, y) - betainc(a, b, x))
