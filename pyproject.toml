[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gaussproc"
version = "0.1.0"
description = "Gaussian process regression with composable covariance functions and hyperparameter optimizers"
requires-python = ">=3.10"
keywords = [
    "gaussian process",
    "regression",
    "kernel",
    "covariance function",
    "machine learning",
    "bayesian",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gaussproc-demo = "gaussproc.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["gaussproc"]

[tool.pytest.ini_options]
addopts = "-ra"
