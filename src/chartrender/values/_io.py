"""Serialization of value tables.

Floating-point literals are decoded to ``decimal.Decimal`` so that values
survive a round trip through the renderer without precision loss. Integers
are already arbitrary precision in Python.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, cast

import yaml

from chartrender.exceptions import ValuesParseError

from ._values import Values

if TYPE_CHECKING:
    from pathlib import Path


class _ValuesLoader(yaml.SafeLoader):
    """Safe loader that keeps float literals exact."""


def _construct_decimal(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> object:
    literal = str(loader.construct_scalar(node)).replace("_", "")
    try:
        value = Decimal(literal)
    except InvalidOperation:
        # .inf, .nan and sexagesimal floats
        return loader.construct_yaml_float(node)
    if not value.is_finite():
        return loader.construct_yaml_float(node)
    return value


_ValuesLoader.add_constructor("tag:yaml.org,2002:float", _construct_decimal)


class _ValuesDumper(yaml.SafeDumper):
    """Safe dumper that understands Values and Decimal."""


def _represent_decimal(dumper: yaml.SafeDumper, value: Decimal) -> yaml.ScalarNode:
    # YAML 1.1 only resolves float literals that contain a dot
    mantissa, marker, exponent = str(value).partition("E")
    if "." not in mantissa:
        mantissa = f"{mantissa}.0"
    return dumper.represent_scalar(
        "tag:yaml.org,2002:float", f"{mantissa}{marker}{exponent}"
    )


_ValuesDumper.add_representer(Values, yaml.SafeDumper.represent_dict)
_ValuesDumper.add_representer(Decimal, _represent_decimal)


def load_yaml(data: str | bytes) -> object:
    """Parse a YAML document with exact numeric decoding.

    Args:
        data: YAML (or JSON) text.

    Returns:
        The decoded document.

    Raises:
        yaml.YAMLError: If the document is malformed.
    """
    return yaml.load(data, Loader=_ValuesLoader)  # noqa: S506


def dump_yaml(data: object) -> str:
    """Encode data as a block-style YAML document with sorted keys."""
    return cast(
        "str",
        yaml.dump(
            data,
            Dumper=_ValuesDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=True,
        ),
    )


def read_values(data: str | bytes) -> Values:
    """Parse a YAML document into a Values table.

    An empty document yields an empty table.

    Args:
        data: YAML (or JSON) text.

    Returns:
        The parsed values.

    Raises:
        ValuesParseError: If the document is malformed or is not a mapping.
    """
    try:
        parsed = load_yaml(data)
    except yaml.YAMLError as e:
        msg = f"Failed to parse values: {e}"
        raise ValuesParseError(msg) from e

    if parsed is None:
        return Values()
    if not isinstance(parsed, dict):
        msg = f"Values document must be a mapping, got {type(parsed).__name__}"
        raise ValuesParseError(msg)
    return Values(cast("dict[str, object]", parsed))


def read_values_file(path: Path) -> Values:
    """Read and parse a YAML values file.

    Args:
        path: Path to the values file.

    Returns:
        The parsed values.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValuesParseError: If the file cannot be parsed.
    """
    return read_values(path.read_text(encoding="utf-8"))
