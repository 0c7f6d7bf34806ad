"""Derivative-free univariate minimization with Brent's method."""

import logging
from collections.abc import Callable
from typing import NamedTuple

logger = logging.getLogger(__name__)

MAX_ITER = 100
CGOLD = 0.3819660
ZEPS = 1.0e-10


def _sign(a: float, b: float) -> float:
    return abs(a) if b >= 0.0 else -abs(a)


class BrentResult(NamedTuple):
    xmin: float
    fmin: float
    converged: bool
    iterations: int


def brent(
    f: Callable[[float], float],
    ax: float,
    bx: float,
    cx: float,
    tol: float = 1e-9,
    max_iter: int = MAX_ITER,
) -> BrentResult:
    """
    Minimizes f over the bracket spanned by ax and cx, starting from bx.

    Combines golden-section steps with parabolic interpolation through the three
    best points found so far (Numerical Recipes, 2nd ed., section 10.2).

    Parameters:
        f (Callable[[float], float]): Objective to minimize.
        ax (float): One end of the bracket.
        bx (float): Initial guess, between ax and cx.
        cx (float): Other end of the bracket.
        tol (float): Fractional tolerance on the abscissa of the minimum.
        max_iter (int): Iteration cap.

    Returns:
        BrentResult: The best abscissa and function value found. If the cap is
        hit before convergence, a warning is logged and converged is False.
    """
    a = min(ax, cx)
    b = max(ax, cx)
    x = w = v = bx
    fx = fw = fv = f(x)
    d = 0.0
    e = 0.0  # distance moved on the step before last

    for iteration in range(1, max_iter + 1):
        xm = 0.5 * (a + b)
        tol1 = tol * abs(x) + ZEPS
        tol2 = 2.0 * tol1
        if abs(x - xm) <= tol2 - 0.5 * (b - a):
            return BrentResult(x, fx, True, iteration)

        if abs(e) > tol1:
            # trial parabolic fit through x, w and v
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            etemp = e
            e = d
            if (
                abs(p) >= abs(0.5 * q * etemp)
                or p <= q * (a - x)
                or p >= q * (b - x)
            ):
                e = a - x if x >= xm else b - x
                d = CGOLD * e
            else:
                d = p / q
                u = x + d
                if u - a < tol2 or b - u < tol2:
                    d = _sign(tol1, xm - x)
        else:
            e = a - x if x >= xm else b - x
            d = CGOLD * e

        u = x + d if abs(d) >= tol1 else x + _sign(tol1, d)
        fu = f(u)

        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, w, x = w, x, u
            fv, fw, fx = fw, fx, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, w = w, u
                fv, fw = fw, fu
            elif fu <= fv or v == x or v == w:
                v = u
                fv = fu

    logger.warning(
        "brent: too many iterations (%s), returning best point x=%s f=%s",
        max_iter,
        x,
        fx,
    )
    return BrentResult(x, fx, False, max_iter)
