"""
Code generation backends.

One backend per derive direction.
"""

from __future__ import annotations

from .base import DeriveBackend, create_environment, python_string
from .deserialize import DeserializeBackend
from .serialize import SerializeBackend

__all__ = [
    "DeriveBackend",
    "DeserializeBackend",
    "SerializeBackend",
    "create_environment",
    "python_string",
]
