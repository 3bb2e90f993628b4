"""Gaussian process regression with composable covariance functions, hyperparameter optimizers and model files."""

__version__ = "0.1.0"