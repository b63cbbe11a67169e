"""Pydantic models for chart metadata."""

from typing import Any, ClassVar

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal

# Chart.yaml keys are camelCase; templates see Go-style PascalCase names.
_ALIASES = AliasGenerator(validation_alias=to_camel, serialization_alias=to_pascal)


class Maintainer(BaseModel):
    """A chart maintainer.

    Attributes:
        name: Maintainer name.
        email: Maintainer email address.
        url: Maintainer URL.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", alias_generator=_ALIASES, populate_by_name=True
    )

    name: str = ""
    email: str = ""
    url: str = Field(default="", validation_alias="url", serialization_alias="URL")


class ChartMetadata(BaseModel):
    """Metadata describing a chart (the contents of Chart.yaml).

    Attributes:
        name: Chart name.
        version: Chart version.
        api_version: Chart API version.
        app_version: Version of the packaged application.
        description: One-line description.
        type: Chart type; ``library`` charts only contribute partials.
        home: Project home page URL.
        icon: Icon URL.
        keywords: Search keywords.
        sources: Source code URLs.
        maintainers: Chart maintainers.
        annotations: Free-form annotations.
        kube_version: Supported Kubernetes version constraint.
        condition: Condition path used by parent charts.
        tags: Tags used by parent charts.
        deprecated: Whether the chart is deprecated.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", alias_generator=_ALIASES, populate_by_name=True
    )

    name: str = Field(..., min_length=1)
    version: str = ""
    api_version: str = Field(
        default="", validation_alias="apiVersion", serialization_alias="APIVersion"
    )
    app_version: str = ""
    description: str = ""
    type: str = ""
    home: str = ""
    icon: str = ""
    keywords: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    maintainers: list[Maintainer] = Field(default_factory=list)
    annotations: dict[str, str] = Field(default_factory=dict)
    kube_version: str = ""
    condition: str = ""
    tags: str = ""
    deprecated: bool = False

    @property
    def is_library(self) -> bool:
        """Whether this is a library chart (case-insensitive type match)."""
        return self.type.lower() == "library"

    def to_template_data(self, *, is_root: bool) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Build the ``Chart`` object exposed to templates.

        Args:
            is_root: Whether the chart is the root of its tree.

        Returns:
            Metadata keyed by PascalCase names, plus ``IsRoot``.
        """
        data = self.model_dump(by_alias=True)
        data["IsRoot"] = is_root
        return data
