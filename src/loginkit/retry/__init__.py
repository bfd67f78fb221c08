"""Retry execution."""

from loginkit.retry.policy import RetryPolicy

__all__ = ["RetryPolicy"]
