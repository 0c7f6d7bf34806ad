import math

import numpy as np
import pytest
from scipy.stats import beta

from effci import EfficiencyInterval, InvalidArgumentError, efficiency_ci
from effci.stats.beta_integral import beta_ab
from effci.stats.efficiency import TOO_LARGE, IntervalObjective

ONE_SIGMA = 0.6827

COUNTS = [(1, 10), (2, 10), (5, 10), (8, 10), (9, 10), (3, 7), (1, 100), (50, 100)]


@pytest.mark.parametrize("conflevel", [0.1, 0.5, ONE_SIGMA, 0.95, 0.999])
def test_no_trials_returns_flat_prior(conflevel):
    assert efficiency_ci(0, 0, conflevel) == EfficiencyInterval(0.5, 0.0, 1.0, True)


def test_no_successes():
    ci = efficiency_ci(0, 5, ONE_SIGMA)
    assert ci.mode == 0.0
    assert ci.low == 0.0
    assert ci.high == pytest.approx(beta.ppf(ONE_SIGMA, 1, 6), abs=1e-9)
    assert beta_ab(0.0, ci.high, 0, 5) == pytest.approx(ONE_SIGMA, abs=1e-12)


def test_all_successes():
    ci = efficiency_ci(5, 5, ONE_SIGMA)
    assert ci.mode == 1.0
    assert ci.high == 1.0
    assert ci.low == pytest.approx(beta.ppf(1 - ONE_SIGMA, 6, 1), abs=1e-9)
    assert beta_ab(ci.low, 1.0, 5, 5) == pytest.approx(ONE_SIGMA, abs=1e-12)


def test_single_successful_trial():
    # Beta(2, 1) has density 2t, so [low, 1] holds 1 - low^2
    ci = efficiency_ci(1, 1, ONE_SIGMA)
    assert ci.mode == 1.0
    assert ci.high == 1.0
    assert ci.low == pytest.approx(math.sqrt(1 - ONE_SIGMA), abs=1e-12)


@pytest.mark.parametrize("k, n", COUNTS)
@pytest.mark.parametrize("conflevel", [0.5, ONE_SIGMA, 0.95])
def test_interval_contains_mode_and_requested_mass(k, n, conflevel):
    ci = efficiency_ci(k, n, conflevel)
    assert ci.converged
    assert ci.mode == k / n
    assert 0.0 <= ci.low <= ci.mode <= ci.high <= 1.0
    assert beta_ab(ci.low, ci.high, k, n) == pytest.approx(conflevel, abs=1e-9)

    err_low, err_high = ci.errors
    assert err_low >= 0.0
    assert err_high >= 0.0
    assert ci.length == pytest.approx(err_low + err_high)


@pytest.mark.parametrize("k, n", [(2, 10), (5, 10), (30, 100)])
def test_shortest_interval_has_equal_density_at_edges(k, n):
    ci = efficiency_ci(k, n, ONE_SIGMA)
    pdf_low = beta.pdf(ci.low, k + 1, n - k + 1)
    pdf_high = beta.pdf(ci.high, k + 1, n - k + 1)
    assert pdf_low == pytest.approx(pdf_high, rel=1e-3)


def test_reflection_symmetry():
    ci = efficiency_ci(2, 10, ONE_SIGMA)
    mirrored = efficiency_ci(8, 10, ONE_SIGMA)
    assert mirrored.mode == pytest.approx(1 - ci.mode)
    assert mirrored.low == pytest.approx(1 - ci.high, abs=1e-6)
    assert mirrored.high == pytest.approx(1 - ci.low, abs=1e-6)
    assert mirrored.length == pytest.approx(ci.length, abs=1e-8)


@pytest.mark.parametrize("k, n", [(0, 8), (3, 8), (8, 8)])
def test_length_grows_with_conflevel(k, n):
    lengths = [
        efficiency_ci(k, n, c).length for c in [0.3, 0.5, ONE_SIGMA, 0.9, 0.95, 0.99]
    ]
    assert all(a <= b + 1e-9 for a, b in zip(lengths, lengths[1:], strict=False))


@pytest.mark.parametrize("k, n", [(1, 10), (4, 10), (7, 20)])
def test_nearby_lower_edges_give_longer_intervals(k, n):
    ci = efficiency_ci(k, n, ONE_SIGMA)
    objective = IntervalObjective(k, n, ONE_SIGMA)
    for offset in np.linspace(-0.05, 0.05, 21):
        low = ci.low + offset
        if not 0.0 <= low <= 1.0:
            continue
        assert objective(low) >= ci.length - 1e-6


def test_objective_marks_infeasible_lower_edges():
    objective = IntervalObjective(5, 10, ONE_SIGMA)
    assert objective.length(0.95) is None
    assert objective(0.95) == TOO_LARGE
    assert 0.0 < objective(0.2) < 1.0


def test_repeated_calls_are_identical():
    first = efficiency_ci(3, 10, ONE_SIGMA)
    efficiency_ci(40, 50, 0.95)
    efficiency_ci(1, 2, 0.1)
    assert efficiency_ci(3, 10, ONE_SIGMA) == first


def test_accepts_numpy_integers():
    assert efficiency_ci(np.int64(3), np.int32(10), np.float64(0.9)) == efficiency_ci(
        3, 10, 0.9
    )


@pytest.mark.parametrize(
    "k, n, conflevel",
    [
        (-1, 5, 0.5),
        (6, 5, 0.5),
        (0, -1, 0.5),
        (2, 5, 0.0),
        (2, 5, 1.0),
        (2, 5, -0.3),
        (2, 5, float("nan")),
        (2.5, 5, 0.5),
        (2, 5.0, 0.5),
        (True, 5, 0.5),
        (2, 5, "high"),
        (2, 5, None),
    ],
)
def test_invalid_arguments(k, n, conflevel):
    with pytest.raises(InvalidArgumentError):
        efficiency_ci(k, n, conflevel)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError, match="0 <= k <= n"):
        efficiency_ci(7, 3, 0.5)
