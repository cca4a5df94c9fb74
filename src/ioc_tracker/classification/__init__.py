"""Indicator classification."""
from ioc_tracker.classification.classifier import (
    FALLBACK_TYPE,
    category_for,
    classify,
)

__all__ = [
    "FALLBACK_TYPE",
    "category_for",
    "classify",
]
