"""Read-only accessor for a chart's non-template files."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from fnmatch import fnmatch
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ._models import ChartFile


class Files:
    """The chart's files, as seen by templates through ``Files``.

    Missing files read as empty content rather than raising, so templates
    can check for optional files.
    """

    __slots__ = ("_files",)

    def __init__(self, files: Iterable[ChartFile] | Mapping[str, bytes] = ()) -> None:
        """Initialize from chart file records or a name-to-bytes mapping."""
        if isinstance(files, Mapping):
            self._files: dict[str, bytes] = dict(files)
        else:
            self._files = {f.name: f.data for f in files}

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"Files({sorted(self._files)!r})"

    def get_bytes(self, name: str) -> bytes:
        """Get a file's raw content, or empty bytes if it does not exist."""
        return self._files.get(name, b"")

    def get(self, name: str) -> str:
        """Get a file's content as text, or an empty string if it does not exist."""
        return self.get_bytes(name).decode("utf-8")

    def glob(self, pattern: str) -> Files:
        """Select the files whose names match a glob pattern.

        Args:
            pattern: Shell-style pattern, e.g. ``config/*.toml``.

        Returns:
            A new Files with only the matching entries.
        """
        return Files({k: v for k, v in self._files.items() if fnmatch(k, pattern)})

    def lines(self, name: str) -> list[str]:
        """Split a file's content into lines, without trailing newlines."""
        content = self.get(name)
        if not content:
            return []
        return content.split("\n")

    def as_config(self) -> str:
        """Render the files as the ``data`` body of a ConfigMap (YAML)."""
        if not self._files:
            return ""
        data = {k.rsplit("/", 1)[-1]: v.decode("utf-8") for k, v in self._files.items()}
        return str(yaml.safe_dump(data, default_flow_style=False)).rstrip("\n")

    def as_secrets(self) -> str:
        """Render the files as the ``data`` body of a Secret (base64 YAML)."""
        if not self._files:
            return ""
        data = {
            k.rsplit("/", 1)[-1]: base64.b64encode(v).decode("ascii")
            for k, v in self._files.items()
        }
        return str(yaml.safe_dump(data, default_flow_style=False)).rstrip("\n")
