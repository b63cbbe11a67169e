"""Helper filters available to chart templates.

Filter names follow the chart template conventions (``toYaml``, ``nindent``)
rather than Python naming, so templates read the same across renderers.
"""

from __future__ import annotations

import base64
import json
from decimal import Decimal
from typing import TYPE_CHECKING

import orjson
import yaml
from jinja2 import Undefined

from chartrender.values import Values, dump_yaml, load_yaml

if TYPE_CHECKING:
    from collections.abc import Callable


def _json_default(value: object) -> object:
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        # Emitted as written, so high-precision decimals keep every digit
        return orjson.Fragment(str(value))
    if isinstance(value, Undefined):
        return None
    msg = f"Type is not JSON serializable: {type(value).__name__}"
    raise TypeError(msg)


def to_yaml(value: object) -> str:
    """Encode a value as YAML without the trailing newline."""
    if isinstance(value, Undefined):
        return ""
    # Plain scalars are dumped with an explicit document end marker
    return dump_yaml(value).removesuffix("...\n").removesuffix("\n")


def from_yaml(text: str) -> object:
    """Decode a YAML document.

    Decoding errors are returned under an ``Error`` key instead of failing
    the render.
    """
    try:
        parsed = load_yaml(text)
    except yaml.YAMLError as e:
        return Values(Error=str(e))
    if isinstance(parsed, dict):
        return Values(parsed)  # pyright: ignore[reportUnknownArgumentType]
    return parsed


def to_json(value: object) -> str:
    """Encode a value as compact JSON with sorted keys."""
    return orjson.dumps(
        value, default=_json_default, option=orjson.OPT_SORT_KEYS
    ).decode("utf-8")


def from_json(text: str) -> object:
    """Decode a JSON document, keeping decimals exact.

    Decoding errors are returned under an ``Error`` key instead of failing
    the render.
    """
    try:
        parsed: object = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        return Values(Error=str(e))
    if isinstance(parsed, dict):
        return Values(parsed)  # pyright: ignore[reportUnknownArgumentType]
    return parsed


def nindent(text: object, width: int) -> str:
    """Prefix a newline and indent every line of text by ``width`` spaces."""
    pad = " " * width
    return "\n" + pad + str(text).replace("\n", "\n" + pad)


def quote(value: object) -> str:
    """Wrap a value in double quotes, escaping it as a JSON string."""
    if value is None or isinstance(value, Undefined):
        return '""'
    return json.dumps(str(value), ensure_ascii=False)


def squote(value: object) -> str:
    """Wrap a value in single quotes."""
    if value is None or isinstance(value, Undefined):
        return "''"
    return f"'{value}'"


def b64enc(value: object) -> str:
    """Base64-encode the UTF-8 text of a value."""
    return base64.b64encode(str(value).encode("utf-8")).decode("ascii")


def b64dec(value: object) -> str:
    """Decode base64 text to a UTF-8 string."""
    return base64.b64decode(str(value)).decode("utf-8")


FILTERS: dict[str, Callable[..., object]] = {
    "toYaml": to_yaml,
    "fromYaml": from_yaml,
    "toJson": to_json,
    "fromJson": from_json,
    "nindent": nindent,
    "quote": quote,
    "squote": squote,
    "b64enc": b64enc,
    "b64dec": b64dec,
}
