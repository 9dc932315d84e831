"""Core pre-screening logic: filename classification and eligibility scoring."""

from .classifier import classify, classify_all, classify_document
from .scorer import evaluate, label_for_score

__all__ = [
    "classify",
    "classify_all",
    "classify_document",
    "evaluate",
    "label_for_score",
]
