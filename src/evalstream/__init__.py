"""Streaming evaluation metrics (rmse / r2 / error) for training loops."""

__version__ = "0.1.0"
