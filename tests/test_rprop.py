import math
import random

import numpy as np
import pytest

from gaussproc.gp import GaussianProcess
from gaussproc.rprop import RProp


def _make_gp(n, scale, seed):
    gp = GaussianProcess(3, "CovSum ( CovSEiso, CovNoise)")
    gp.covf.set_loghyper([0.0, 0.0, math.log(0.01)])
    X = np.random.default_rng(seed).uniform(-1.0, 1.0, size=(n, 3)) * scale
    y = gp.covf.draw_random_sample(X, random.Random(seed))
    for row, target in zip(X, y):
        gp.add_pattern(row, target)
    return gp


@pytest.fixture
def small_gp():
    return _make_gp(30, 3.0, seed=7)


def test_recovers_hyperparameters():
    gp = _make_gp(150, 4.0, seed=1)
    truth_lik = gp.log_likelihood()
    gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    RProp().maximize(gp, 50, False)
    params = gp.covf.get_loghyper()
    assert params[0] == pytest.approx(0.0, abs=0.3)
    assert params[1] == pytest.approx(0.0, abs=0.3)
    assert gp.log_likelihood() >= truth_lik - 1.0


def test_zero_iterations_keeps_parameters(small_gp):
    start = np.array([-1.0, -1.0, -1.0])
    small_gp.covf.set_loghyper(start)
    RProp().maximize(small_gp, 0, False)
    assert np.array_equal(small_gp.covf.get_loghyper(), start)


def test_large_stop_threshold_keeps_parameters(small_gp):
    start = np.array([-0.5, 0.3, -2.0])
    small_gp.covf.set_loghyper(start)
    RProp(eps_stop=1e12).maximize(small_gp, 10, False)
    assert np.array_equal(small_gp.covf.get_loghyper(), start)


def test_single_step_moves_uphill_by_delta0(small_gp):
    start = np.array([-1.0, -1.0, -1.0])
    small_gp.covf.set_loghyper(start)
    uphill = small_gp.log_likelihood_gradient()
    RProp(delta0=0.25).maximize(small_gp, 1, False)
    diff = small_gp.covf.get_loghyper() - start
    assert np.allclose(np.abs(diff), 0.25)
    assert np.array_equal(np.sign(diff), np.sign(uphill))


def test_verbose_output_and_best_kept(small_gp, capsys):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    RProp().maximize(small_gp, 3, True)
    lines = capsys.readouterr().out.split("\n")
    lines = [line for line in lines if line]
    assert [line.split()[0] for line in lines] == ["0", "1", "2"]
    best_nll = min(float(line.split()[1]) for line in lines)
    assert -small_gp.log_likelihood() == pytest.approx(best_nll, rel=1e-5)


def test_likelihood_improves(small_gp):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    before = small_gp.log_likelihood()
    RProp().maximize(small_gp, 20, False)
    assert small_gp.log_likelihood() > before