import math
import random

import numpy as np
import pytest

from gaussproc.cg import CG
from gaussproc.gp import GaussianProcess


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
    return _make_gp(30, 3.0, seed=11)


def test_recovers_hyperparameters():
    gp = _make_gp(150, 4.0, seed=1)
    truth_lik = gp.log_likelihood()
    gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    CG().maximize(gp, 50, False)
    params = gp.covf.get_loghyper()
    assert params[0] == pytest.approx(0.0, abs=0.3)
    assert params[1] == pytest.approx(0.0, abs=0.3)
    assert gp.log_likelihood() >= truth_lik - 1.0


def test_never_worsens_likelihood(small_gp):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    before = small_gp.log_likelihood()
    CG().maximize(small_gp, 20, False)
    assert small_gp.log_likelihood() >= before - 1e-9


def test_likelihood_improves(small_gp):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    before = small_gp.log_likelihood()
    CG().maximize(small_gp, 20, False)
    assert small_gp.log_likelihood() > before


def test_zero_iterations_keeps_parameters(small_gp):
    start = np.array([-1.0, -0.5, -1.5])
    small_gp.covf.set_loghyper(start)
    CG().maximize(small_gp, 0, False)
    assert np.array_equal(small_gp.covf.get_loghyper(), start)


def test_verbose_reports_initial_value(small_gp, capsys):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    before = small_gp.log_likelihood()
    CG().maximize(small_gp, 5, True)
    lines = [line for line in capsys.readouterr().out.split("\n") if line]
    assert len(lines) >= 2
    assert float(lines[0]) == pytest.approx(-before, rel=1e-5)


def test_zero_iterations_verbose_prints_only_start(small_gp, capsys):
    small_gp.covf.set_loghyper([-1.0, -1.0, -1.0])
    before = small_gp.log_likelihood()
    CG().maximize(small_gp, 0, True)
    lines = [line for line in capsys.readouterr().out.split("\n") if line]
    assert len(lines) == 1
    assert float(lines[0]) == pytest.approx(-before, rel=1e-5)