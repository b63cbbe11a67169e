"""Value tables with dotted-path traversal."""

from __future__ import annotations

from collections.abc import Mapping
from typing import IO, TYPE_CHECKING, Any

from chartrender.exceptions import InvalidPathError, NoTableError, NoValueError

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_path(path: str) -> list[str]:
    """Split a dotted path into its segments."""
    return path.split(".")


def join_path(*segments: str) -> str:
    """Join path segments into a dotted path."""
    return ".".join(segments)


def is_table(value: object) -> bool:
    """Check whether a value is a table (a nested mapping).

    Args:
        value: Any value from a value table.

    Returns:
        True if the value is a mapping, False otherwise.
    """
    return isinstance(value, Mapping)


def _table_lookup(table: Mapping[str, Any], key: str) -> Values:  # pyright: ignore[reportExplicitAny]
    if key not in table:
        raise NoTableError(key)
    value: object = table[key]
    if isinstance(value, Values):
        return value
    if isinstance(value, Mapping):
        return Values(value)  # pyright: ignore[reportUnknownArgumentType]
    raise NoTableError(key)


class Values(dict[str, Any]):  # pyright: ignore[reportExplicitAny]
    """A table of configuration values.

    Keys are strings; values are scalars, nested tables (any mapping), or
    lists of either. Compound table names use dots: ``foo.bar`` is "the
    table ``bar`` inside the table ``foo``".
    """

    def table(self, name: str) -> Values:
        """Get a nested table by dotted path.

        Args:
            name: Dotted path of the table, e.g. ``Values.mysql``.

        Returns:
            The table at the end of the path.

        Raises:
            NoTableError: If a segment is missing or is not a table. The
                error names the first offending segment.
        """
        table: Values = self
        for key in parse_path(name):
            table = _table_lookup(table, key)
        return table

    def path_value(self, path: str) -> object:
        """Get the non-table value at the end of a dotted path.

        Given ``chapter: {one: {title: Loomings}}``, the value at
        ``chapter.one.title`` is ``"Loomings"``.

        Args:
            path: Dotted path from the root of this table.

        Returns:
            The leaf value.

        Raises:
            InvalidPathError: If the path is empty.
            NoValueError: If the leaf is missing or is itself a table.
        """
        if path == "":
            msg = "YAML path cannot be empty"
            raise InvalidPathError(msg)
        return self._path_value(parse_path(path))

    def _path_value(self, segments: Sequence[str]) -> object:
        *parents, key = segments
        if parents:
            try:
                table = self.table(join_path(*parents))
            except NoTableError as e:
                raise NoValueError(key) from e
        else:
            table = self

        if key in table and not is_table(table[key]):
            return table[key]
        raise NoValueError(key)

    def as_map(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Return the values as a plain dictionary."""
        return dict(self)

    def to_yaml(self) -> str:
        """Encode the values as a YAML document."""
        from ._io import dump_yaml  # noqa: PLC0415

        return dump_yaml(self)

    def encode(self, stream: IO[str]) -> None:
        """Write the values as YAML to a text stream.

        Args:
            stream: Writable text stream.
        """
        _ = stream.write(self.to_yaml())
