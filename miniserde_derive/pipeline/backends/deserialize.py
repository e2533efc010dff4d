"""
Deserialize backend.

Structs are built incrementally: a state object holds one place per
field, keys are dispatched to the matching field in any order, and
`finish()` constructs the value once every field has been supplied.
Enums map an external name back to its variant.
"""

from __future__ import annotations

from .base import DeriveBackend


class DeserializeBackend(DeriveBackend):
    """Generates `de.impl` entry points and their visitors."""

    DIRECTION = "Deserialize"

    STRUCT_TEMPLATE = "struct_deserialize.py.jinja2"
    ENUM_TEMPLATE = "enum_deserialize.py.jinja2"
