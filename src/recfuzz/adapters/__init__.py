"""Adaptors for third-party randomized-testing drivers."""

from .quick import QuickGenerator, as_strategy, check, quick_generator, quick_values

__all__ = ["QuickGenerator", "as_strategy", "check", "quick_generator", "quick_values"]
