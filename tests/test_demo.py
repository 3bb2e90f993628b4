import pytest

from gaussproc.demo import main, run


def test_run_fits_hill_function():
    mse = run(n=300, m=50, seed=1)
    assert 0.0 <= mse < 0.1


def test_run_is_reproducible_with_seed():
    first = run(n=40, m=10, seed=5)
    second = run(n=40, m=10, seed=5)
    assert first >= 0.0
    assert first == second


def test_more_data_helps():
    assert run(n=300, m=100, seed=2) < run(n=5, m=100, seed=2)


def test_run_rejects_bad_sizes():
    with pytest.raises(ValueError):
        run(n=10, m=0, seed=1)
    with pytest.raises(ValueError):
        run(n=-1, m=10, seed=1)


def test_main_prints_mse(capsys):
    assert main(["--n", "50", "--m", "10", "--seed", "3"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("mse = ")
    assert float(out[len("mse = "):]) == run(n=50, m=10, seed=3)


def test_main_rejects_bad_arguments():
    with pytest.raises(SystemExit) as info:
        main(["--m", "0"])
    assert info.value.code == 2