"""
Text rendering for error values of any shape.

``serialize_error`` turns whatever came back in ``FetchResponse.error`` (or
anything else a caller wants to log) into a readable string. It never
raises.
"""

import dataclasses
import json
import logging
import numbers
from collections.abc import Mapping
from functools import singledispatch
from typing import Any

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "no value was given at all", as opposed to None."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def serialize_error(error: Any = MISSING) -> str:
    """
    Render an error value as text.

    - None -> "None", no argument -> "<missing>"
    - strings are returned unchanged
    - dicts, lists, exceptions, dataclasses and plain objects are dumped as
      indented JSON; if that fails (cycles, unrepresentable members) the
      value's own string form is used instead
    - other scalars use str()
    """
    return _render(error)


@singledispatch
def _render(value: Any) -> str:
    return _dump(value)


@_render.register(_Missing)
def _render_missing(value: _Missing) -> str:
    return repr(value)


@_render.register(type(None))
def _render_none(value: None) -> str:
    return "None"


@_render.register(str)
def _render_str(value: str) -> str:
    return value


@_render.register(numbers.Number)
@_render.register(bytes)
def _render_scalar(value: Any) -> str:
    return _coerce(value)


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=_to_structure, ensure_ascii=False)
    except Exception as e:
        logger.debug("Structural dump of %s failed: %s", type(value).__name__, e)
        return _coerce(value)


def _to_structure(obj: Any) -> Any:
    """json.dumps hook: one level of structure for non-JSON objects."""
    if isinstance(obj, BaseException):
        try:
            message = str(obj)
        except Exception:
            message = ""
        structure = {"type": type(obj).__name__, "message": message}
        for key, val in _public_attrs(obj).items():
            structure.setdefault(key, val)
        return structure

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}

    if isinstance(obj, Mapping):
        return dict(obj)

    if isinstance(obj, (set, frozenset)):
        return list(obj)

    attrs = _public_attrs(obj)
    if attrs:
        return attrs

    raise TypeError(f"Object of type {type(obj).__name__} has no structure to dump")


def _public_attrs(obj: Any) -> dict:
    try:
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    except TypeError:
        return {}


def _coerce(value: Any) -> str:
    """Plain str() fallback, avoiding the bare <X object at 0x...> form."""
    cls = type(value)
    try:
        text = str(value)
    except Exception:
        # str() refuses ints past the conversion digit limit; hex() does not
        text = hex(value) if isinstance(value, int) else ""

    if text and not (cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__):
        return text

    try:
        attrs = vars(value)
    except TypeError:
        attrs = None

    if attrs:
        try:
            return f"{cls.__qualname__}({attrs!r})"
        except Exception:
            pass
    return cls.__qualname__
