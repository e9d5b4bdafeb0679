"""Utility functions."""

from .retry import RetryDecision, RetryPolicy, retry_async

__all__ = ["RetryDecision", "RetryPolicy", "retry_async"]
