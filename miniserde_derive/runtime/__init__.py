"""
Runtime object model targeted by generated code.

`ser` and `de` define the push-style serialization contract; `json` is a
driver built on top of it.
"""

from __future__ import annotations

from . import de, json, ser

__all__ = [
    "de",
    "json",
    "ser",
]
