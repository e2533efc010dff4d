"""
Serialize backend.

Structs are exposed as a lazy map of ``(external name, field value)``
pairs in declaration order; enums as the external name of the variant.
"""

from __future__ import annotations

from .base import DeriveBackend


class SerializeBackend(DeriveBackend):
    """Generates `ser.begin` implementations."""

    DIRECTION = "Serialize"

    STRUCT_TEMPLATE = "struct_serialize.py.jinja2"
    ENUM_TEMPLATE = "enum_serialize.py.jinja2"
