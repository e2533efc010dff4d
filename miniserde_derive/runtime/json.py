"""
JSON driver for the runtime object model.

`to_string` walks the fragments of a value; `from_str` decodes JSON text
and pushes every decoded value into the visitor of the requested type.
"""

from __future__ import annotations

import json
import math
from typing import Any

from . import de, ser


def to_string(value: Any) -> str:
    """Serialize `value` to compact JSON text."""
    return json.dumps(_to_python(ser.begin(value)), separators=(",", ":"), ensure_ascii=False)


def from_str(tp: Any, text: str) -> Any:
    """
    Deserialize JSON text into a value of type `tp`.

    Raises:
        de.Error: If the text is not valid JSON or does not match `tp`
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise de.Error(f"invalid JSON: {e.msg}") from e

    out = de.Place()
    _push(data, de.begin(tp, out))
    return out.take()


def _to_python(fragment: ser.Fragment) -> Any:
    kind = fragment.kind
    if kind == ser.FragmentKind.SEQ:
        return [_to_python(ser.begin(element)) for element in fragment.value]
    if kind == ser.FragmentKind.MAP:
        result = {}
        for key, value in fragment.value:
            if not isinstance(key, str):
                raise TypeError(f"map keys must be strings, got {type(key).__name__}")
            result[key] = _to_python(ser.begin(value))
        return result
    if kind == ser.FragmentKind.FLOAT and not math.isfinite(fragment.value):
        return None
    return fragment.value


def _push(data: Any, visitor: de.Visitor) -> None:
    if data is None:
        visitor.null()
    elif isinstance(data, bool):
        visitor.boolean(data)
    elif isinstance(data, int):
        visitor.integer(data)
    elif isinstance(data, float):
        visitor.floating(data)
    elif isinstance(data, str):
        visitor.string(data)
    elif isinstance(data, list):
        seq = visitor.seq()
        for element in data:
            _push(element, seq.element())
        seq.finish()
    else:
        map = visitor.map()
        for key, value in data.items():
            _push(value, map.key(key))
        map.finish()
