# gaussproc

Gaussian process regression built on NumPy and SciPy. You describe a model's
covariance function with a short expression such as
`"CovSum(CovSEiso, CovNoise)"`. The hyperparameters are stored on a log scale.
You can tune them by maximising the log marginal likelihood.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Covariance functions

Atomic functions:

| Name                    | Module                  | Log-hyperparameters                       |
|-------------------------|-------------------------|-------------------------------------------|
| `CovSEiso`              | `gaussproc.stationary`  | length scale, signal std                  |
| `CovSEard`              | `gaussproc.stationary`  | one length scale per input, signal std    |
| `CovMatern3iso`         | `gaussproc.stationary`  | length scale, signal std                  |
| `CovMatern5iso`         | `gaussproc.stationary`  | length scale, signal std                  |
| `CovRQiso`              | `gaussproc.stationary`  | length scale, signal std, alpha           |
| `CovPeriodic`           | `gaussproc.stationary`  | length scale, signal std, period          |
| `CovPeriodicMatern3iso` | `gaussproc.stationary`  | length scale, signal std, period          |
| `CovLinearard`          | `gaussproc.linear`      | one length scale per input                |
| `CovLinearone`          | `gaussproc.linear`      | one scale                                 |
| `CovNoise`              | `gaussproc.linear`      | noise std                                 |

The periodic functions take the period parameter directly and do not
exponentiate it. `CovPeriodic` uses the period's absolute value and reports a
zero gradient for it.

`CovNoise` returns a non-zero value only when both arguments are the very same
array object. Inside a `GaussianProcess` this means the following:

- Noise enters the diagonal of the training kernel matrix.
- Noise enters the variance returned by `var`.
- Noise does not enter the cross-covariances used by `f`.

Composite functions, in `gaussproc.composite`:

- `CovSum(a, b)` is the sum of two functions.
- `CovProd(a, b)` is the product of two functions.
- `InputDimFilter(k/a)` applies the one-dimensional function `a` to input
  dimension `k` only. The nested function is given freshly sliced vectors, so a
  nested `CovNoise` always contributes zero.

The parameter vector of a composite is the parameter vectors of its parts,
concatenated in order.

Every covariance function has these members:

- `get(x1, x2)` returns the covariance.
- `grad(x1, x2)` returns the gradient with respect to the log-hyperparameters.
- `set_loghyper(p)` sets the log-hyperparameters.
- `get_loghyper()` returns a copy of the log-hyperparameters.
- `param_dim` and `input_dim` give the parameter and input dimensions.
- `draw_random_sample(X, rng=None)` draws target values for the rows of `X`.
- `str(covf)` returns the function's definition string.

### Building from expressions

`gaussproc.factory.CovFactory` has two methods:

- `create(input_dim, expr)` parses an expression, ignoring spaces, and returns
  the covariance function it describes.
- `list()` returns the registered names, sorted.

`create` raises `CovFactoryError`, a subclass of `ValueError`, in these cases:

- the expression names an unknown function;
- the parentheses are unbalanced;
- a function is given the wrong kind of arguments;
- the filter dimension is out of range.

```python
from gaussproc.factory import CovFactory

covf = CovFactory().create(4, "CovSum ( CovLinearone , CovNoise )")
print(covf)             # CovSum(CovLinearone, CovNoise)
print(covf.param_dim)   # 2
```

## Regression

```python
import numpy as np
from gaussproc.gp import GaussianProcess
from gaussproc.utils import hill

gp = GaussianProcess(2, "CovSum(CovSEiso, CovNoise)")
gp.covf.set_loghyper([0.0, 0.0, -2.0])

rng = np.random.default_rng(0)
for _ in range(200):
    x = rng.uniform(-2, 2, size=2)
    gp.add_pattern(x, hill(x[0], x[1]))

print(gp.f([0.5, -0.5]))      # predictive mean
print(gp.var([0.5, -0.5]))    # predictive variance
print(gp.log_likelihood())
print(gp.log_likelihood_gradient())
```

`add_pattern` updates the lower Cholesky factor of the kernel matrix
incrementally. The factor is rebuilt from scratch only after the
hyperparameters change.

`GaussianProcess` also has these members:

- `set_y(i, y)` replaces a target value.
- `clear_sampleset()` removes all samples.
- `len(gp)` gives the number of samples.
- `copy()` returns an independent copy of the model.
- `sampleset` returns the `gaussproc.sampleset.SampleSet` holding the training
  data.

With no training samples, `f` and `var` both return `0.0`. If the kernel
matrix is not positive definite, NumPy raises `numpy.linalg.LinAlgError`.

### Optimising hyperparameters

```python
from gaussproc.rprop import RProp
from gaussproc.cg import CG

RProp().maximize(gp, n=50, verbose=False)
# or
CG().maximize(gp, n=50, verbose=False)
```

`RProp` is a dataclass whose step sizes and factors can be set:

- `eps_stop`
- `delta0`
- `delta_min`
- `delta_max`
- `eta_minus`
- `eta_plus`

`RProp` runs at most `n` steps and leaves the hyperparameters with the highest
likelihood it saw on `gp.covf`.

`CG` minimises the negative log likelihood by conjugate gradients, using
Wolfe-Powell line searches. It uses about `n` likelihood evaluations.

Both optimisers print their progress unless `verbose=False` is passed.

### Saving and loading

```python
gp.write("model.gp")
restored = GaussianProcess.read("model.gp")
```

A model file is plain text. It holds, in order:

- the input dimensionality;
- the covariance expression;
- the log-hyperparameters;
- one line per training pattern, with the target value first.

Empty lines and lines that start with `#` are ignored. `GaussianProcess.read`
raises `ModelFileError` in two cases: the file is incomplete, or a value in it
cannot be parsed.

## Utilities

`gaussproc.utils` provides these functions:

- `randn`, `randperm` and `randi` draw random numbers. Each takes an optional
  `rng` with a `random()` method.
- `cdf_norm` is the standard normal CDF.
- `friedman` and `hill` are benchmark functions.
- `sign` returns the sign of a number.

## Demo

```
gaussproc-demo
```

The demo does the following:

1. It fits a `CovSum(CovSEiso, CovNoise)` model to noisy samples of the hill
   function.
2. It prints the mean squared error on held-out points.

Options:

- `--n` sets the number of training patterns. The default is 4000.
- `--m` sets the number of test points. The default is 1000.
- `--seed` sets the random seed.

The same computation is available as `gaussproc.demo.run(n, m, seed)`.

## Limitations

The kernel matrix is always dense and factorised in full. There is no sparse
or approximate Gaussian process, so large training sets are slow and use a lot
of memory.