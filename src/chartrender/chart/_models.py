"""Chart tree models."""

from __future__ import annotations

import base64
import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast

from pydantic import ValidationError

from chartrender.exceptions import ChartError

from ._metadata import ChartMetadata

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ChartFile:
    """A named file inside a chart.

    Attributes:
        name: Chart-relative path, e.g. ``templates/deployment.yaml``.
        data: Raw file content.
    """

    name: str
    data: bytes

    @property
    def text(self) -> str:
        """The content decoded as UTF-8."""
        return self.data.decode("utf-8")


@dataclass(slots=True, eq=False)
class Chart:
    """A chart or sub-chart node in a dependency tree.

    Attaching a chart as a dependency sets its ``parent``; the tree must not
    contain cycles.

    Attributes:
        metadata: The chart's metadata.
        templates: Template sources. ``None`` entries are tolerated and skipped.
        files: Non-template files, exposed to templates through ``Files``.
        dependencies: Sub-charts, in declaration order.
        parent: The chart this one is a dependency of, or None for the root.
    """

    metadata: ChartMetadata
    templates: list[ChartFile | None] = field(default_factory=list)
    files: list[ChartFile] = field(default_factory=list)
    dependencies: list[Chart] = field(default_factory=list)
    parent: Chart | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.dependencies:
            child.parent = self

    @property
    def name(self) -> str:
        """The chart name from its metadata."""
        return self.metadata.name

    @property
    def is_root(self) -> bool:
        """Whether this chart has no parent."""
        return self.parent is None

    @property
    def is_library(self) -> bool:
        """Whether this is a library chart."""
        return self.metadata.is_library

    @property
    def full_path(self) -> str:
        """Path of this chart from the root, e.g. ``web/charts/db``."""
        if self.parent is None:
            return self.name
        return posixpath.join(self.parent.full_path, "charts", self.name)

    def add_dependency(self, *charts: Chart) -> None:
        """Attach sub-charts to this chart.

        Args:
            charts: Charts to attach; their ``parent`` is set to this chart.
        """
        for child in charts:
            child.parent = self
            self.dependencies.append(child)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Chart:  # pyright: ignore[reportExplicitAny]
        """Build a chart tree from plain data.

        Expected shape::

            {
                "metadata": {"name": "web", "version": "1.0.0", ...},
                "templates": [{"name": "templates/a.yaml", "data": "..."}],
                "files": [{"name": "config.ini", "data": "..."}],
                "dependencies": [{...}, ...],
            }

        File ``data`` may be ``str``, ``bytes``, or a mapping with a
        ``base64`` key. ``None`` entries in ``templates`` are kept.

        Args:
            data: Chart description.

        Returns:
            The root of the built tree.

        Raises:
            ChartError: If the description is malformed.
        """
        try:
            metadata = ChartMetadata.model_validate(data.get("metadata", {}))
        except ValidationError as e:
            msg = f"Invalid chart metadata: {e}"
            raise ChartError(msg) from e

        templates: list[ChartFile | None] = [
            None if entry is None else _file_from_dict(entry)
            for entry in data.get("templates") or []
        ]
        files = [_file_from_dict(entry) for entry in data.get("files") or []]
        dependencies = [cls.from_dict(dep) for dep in data.get("dependencies") or []]

        return cls(
            metadata=metadata,
            templates=templates,
            files=files,
            dependencies=dependencies,
        )


def _file_from_dict(entry: object) -> ChartFile:
    if not isinstance(entry, dict):
        msg = f"Chart file entry must be a mapping, got {type(entry).__name__}"
        raise ChartError(msg)

    file_entry = cast("dict[str, object]", entry)
    name = file_entry.get("name")
    if not isinstance(name, str) or not name:
        msg = "Chart file entry requires a non-empty 'name'"
        raise ChartError(msg)

    raw = file_entry.get("data", b"")
    if isinstance(raw, bytes):
        data = raw
    elif isinstance(raw, str):
        data = raw.encode("utf-8")
    elif isinstance(raw, dict) and isinstance(raw.get("base64"), str):
        data = base64.b64decode(cast("str", raw["base64"]))
    else:
        msg = f"Chart file {name!r} has unsupported data of type {type(raw).__name__}"
        raise ChartError(msg)

    return ChartFile(name=name, data=data)
