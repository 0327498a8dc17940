import dataclasses
import logging
import math

import numpy as np
import pytest

from optimizer1d import (
    METHOD_BRENT,
    METHOD_GOLDEN_SECTION,
    BracketInvariantError,
    BudgetExceededError,
    DegenerateSeedError,
    ErrorKind,
    ExtremumResult,
    Optimizer1D,
    Optimizer1DError,
    maximize_scalar,
    minimize_scalar,
)


def quartic(x):
    return (x - 3.0) ** 2 + 0.5 * (x - 3.0) ** 4


def test_minimize_quadratic():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=100)

    xmin, fmin = opt.minimize(0.0, 10.0)

    assert xmin == pytest.approx(3.0, abs=1e-6)
    assert fmin == pytest.approx(0.0, abs=1e-12)
    assert 3 < opt.get_n_calls() <= 100


@pytest.mark.parametrize(
    "func, xA, xB, x0",
    [
        (lambda x: math.cosh(x - 1.5), 0.0, 0.5, 1.5),
        (lambda x: x - math.log(x), 0.5, 0.6, 1.0),
        (lambda x: math.cosh((x + 250.0) / 100.0), -10.0, -20.0, -250.0),
    ],
)
def test_minimum_where_values_round_to_equal(func, xA, xB, x0):
    opt = Optimizer1D(func, max_eval=200)

    xmin, _ = opt.minimize(xA, xB)

    assert xmin == pytest.approx(x0, abs=1e-6 * max(1.0, abs(x0)))


def test_maximize_reports_true_maximum():
    opt = Optimizer1D(lambda x: -((x - 3.0) ** 2) + 5.0, max_eval=100)

    xmax, fmax = opt.maximize(-5.0, 5.0)

    assert xmax == pytest.approx(3.0, abs=1e-6)
    assert fmax == pytest.approx(5.0, abs=1e-12)


def test_maximize_of_negated_function_mirrors_minimize():
    fmin_opt = Optimizer1D(quartic, max_eval=100)
    fmax_opt = Optimizer1D(lambda x: -quartic(x), max_eval=100)

    xmin, fmin = fmin_opt.minimize(0.0, 1.0)
    xmax, fmax = fmax_opt.maximize(0.0, 1.0)

    assert xmin == xmax
    assert fmin == -fmax
    assert fmin_opt.get_n_calls() == fmax_opt.get_n_calls()
    np.testing.assert_array_equal(fmin_opt.get_stats()[0], fmax_opt.get_stats()[0])


def test_stats_cover_last_run_in_call_order():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=100)
    opt.minimize(0.0, 10.0)

    xs, fs = opt.get_stats()

    assert len(xs) == len(fs) == opt.get_n_calls()
    assert xs[0] == 0.0
    assert xs[1] == 10.0
    np.testing.assert_allclose(fs, (xs - 3.0) ** 2)
    assert opt.records()[1].x == 10.0


def test_stats_store_negated_values_when_maximizing():
    opt = Optimizer1D(lambda x: -((x - 3.0) ** 2) + 5.0, max_eval=100)
    opt.maximize(-5.0, 5.0)

    xs, fs = opt.get_stats()

    np.testing.assert_allclose(fs, (xs - 3.0) ** 2 - 5.0)


def test_each_run_resets_the_log():
    opt = Optimizer1D(quartic, max_eval=100)
    opt.minimize(0.0, 1.0)
    first = opt.get_n_calls()

    opt.minimize(0.0, 1.0)

    assert opt.get_n_calls() == first
    assert Optimizer1D(quartic, max_eval=100).optimize(0.0, 1.0).func_evals == first


def test_camel_case_aliases():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=100)
    opt.minimize(0.0, 10.0)

    xs, _ = opt.getStats()
    assert opt.getNFcalls() == opt.get_n_calls() == len(xs)


def test_optimize_result():
    opt = Optimizer1D(quartic, max_eval=100)

    result = opt.optimize(0.0, 1.0)

    assert isinstance(result, ExtremumResult)
    assert result.mode == "minimize"
    assert result.method == METHOD_BRENT
    assert result.func_evals == opt.get_n_calls()
    lo, hi = sorted((result.bracket[0], result.bracket[2]))
    assert lo < 3.0 < hi
    assert opt.last_result is result


def test_result_fields():
    names = [f.name for f in dataclasses.fields(ExtremumResult)]

    assert names == ["x_star", "f_star", "mode", "method", "bracket", "func_evals"]


def test_golden_section_method():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=200)

    xmin, fmin = opt.minimize(0.0, 10.0, method=METHOD_GOLDEN_SECTION)

    assert xmin == pytest.approx(3.0, abs=1e-6)
    assert opt.last_result.method == METHOD_GOLDEN_SECTION


def test_golden_section_maximize():
    opt = Optimizer1D(lambda x: -abs(x - 2.3) + 1.0, max_eval=200)

    xmax, fmax = opt.maximize(0.0, 1.0, method=METHOD_GOLDEN_SECTION)

    assert xmax == pytest.approx(2.3, abs=1e-6)
    assert fmax == pytest.approx(1.0, abs=1e-6)


def test_unknown_method():
    opt = Optimizer1D(quartic)

    with pytest.raises(ValueError):
        opt.minimize(0.0, 1.0, method="newton")


def test_identical_seeds():
    opt = Optimizer1D(quartic)

    with pytest.raises(DegenerateSeedError) as excinfo:
        opt.minimize(2.0, 2.0)

    assert excinfo.value.kind is ErrorKind.DEGENERATE_SEED
    assert opt.get_n_calls() == 0


def test_constant_function():
    opt = Optimizer1D(lambda x: 7.0)

    with pytest.raises(DegenerateSeedError):
        opt.maximize(0.0, 1.0)

    assert opt.get_n_calls() == 2
    assert opt.last_result is None


def test_budget_too_low():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=2)

    with pytest.raises(BudgetExceededError):
        opt.minimize(0.0, 10.0)

    assert opt.get_n_calls() == 2


def test_budget_exhausted_during_refinement():
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=5)

    with pytest.raises(BudgetExceededError) as excinfo:
        opt.minimize(0.0, 10.0)

    assert opt.get_n_calls() == 5
    assert excinfo.value.max_eval == 5
    assert opt.last_result is None


@pytest.mark.parametrize("max_eval", range(1, 40))
def test_call_count_never_exceeds_budget(max_eval):
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=max_eval)

    try:
        opt.minimize(0.0, 10.0)
    except BudgetExceededError:
        pass

    assert opt.get_n_calls() <= max_eval


def test_error_hierarchy():
    assert issubclass(DegenerateSeedError, ValueError)
    assert issubclass(BudgetExceededError, RuntimeError)
    assert issubclass(BracketInvariantError, RuntimeError)
    for cls in (DegenerateSeedError, BudgetExceededError, BracketInvariantError):
        assert issubclass(cls, Optimizer1DError)


@pytest.mark.parametrize(
    "xA, xB, max_eval, kind",
    [
        (1.0, 1.0, 100, ErrorKind.DEGENERATE_SEED),
        (0.0, 10.0, 5, ErrorKind.BUDGET_EXCEEDED),
    ],
)
def test_failures_are_tagged_by_kind(xA, xB, max_eval, kind):
    opt = Optimizer1D(lambda x: (x - 3.0) ** 2, max_eval=max_eval)

    with pytest.raises(Optimizer1DError) as excinfo:
        opt.minimize(xA, xB)

    assert excinfo.value.kind is kind
    assert opt.last_result is None


@pytest.mark.parametrize("max_eval", [0, -3, 2.5, True])
def test_invalid_budget(max_eval):
    with pytest.raises(ValueError):
        Optimizer1D(quartic, max_eval=max_eval)


def test_objective_must_be_callable():
    with pytest.raises(TypeError):
        Optimizer1D(3.0)


def test_options_are_validated():
    with pytest.raises(ValueError):
        Optimizer1D(quartic, options={"x_tolerance": 0.0})


def test_looser_tolerance_option():
    opt = Optimizer1D(quartic, max_eval=100, options={"x_tolerance": 1e-4})

    xmin, _ = opt.minimize(0.0, 1.0)

    assert xmin == pytest.approx(3.0, abs=5e-3)


def test_float32():
    opt = Optimizer1D(quartic, max_eval=500, dtype=np.float32)

    xmin, fmin = opt.minimize(0.0, 1.0)

    assert xmin == pytest.approx(3.0, abs=1e-2)
    assert opt.get_stats()[0].dtype == np.float32


def test_scalar_helpers():
    res_min = minimize_scalar(lambda x: math.cosh(x - 1.5), 0.0, 0.5)
    res_max = maximize_scalar(lambda x: x * math.exp(-x), 0.5, 1.5)

    assert res_min.x_star == pytest.approx(1.5, abs=1e-6)
    assert res_min.f_star == pytest.approx(1.0)
    assert res_max.x_star == pytest.approx(1.0, abs=1e-6)
    assert res_max.f_star == pytest.approx(math.exp(-1.0))
    assert res_max.mode == "maximize"


def test_debug_trace_is_opt_in(caplog):
    opt = Optimizer1D(quartic, max_eval=100)

    opt.minimize(0.0, 1.0)
    assert not [r for r in caplog.records if r.name.startswith("optimizer1d")]

    with caplog.at_level(logging.DEBUG, logger="optimizer1d"):
        opt.minimize(0.0, 1.0)

    names = {r.name for r in caplog.records}
    assert "optimizer1d.core.brent" in names
    assert "optimizer1d.core.bracket" in names
    assert "optimizer1d.core.evaluation_log" in names
