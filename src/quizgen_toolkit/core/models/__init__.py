"""
Core Models Package

Immutable, validated data models shared by the recovery pipeline and its
callers.

All models in this package are frozen dataclasses. This ensures:
1. No mutation after a question has been accepted
2. Safe to share between threads without coordination
3. Structural equality is the only identity a question has
"""

from .candidates import JsonCandidate
from .questions import CanonicalQuestion

__all__ = [
    "CanonicalQuestion",
    "JsonCandidate",
]
