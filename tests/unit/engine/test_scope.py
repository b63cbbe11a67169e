from collections.abc import Callable

import pytest

from chartrender.chart import Chart, ChartFile, ChartMetadata, Files
from chartrender.engine import all_templates
from chartrender.values import Values

MakeChart = Callable[..., Chart]

RENDER_VALUES = {
    "Values": {"replicas": 3, "db": {"port": 5432, "cache": {"size": 64}}},
    "Release": {"Name": "prod", "Namespace": "web"},
    "Capabilities": {"KubeVersion": {"Version": "v1.29.0"}},
}


@pytest.fixture
def tree(make_chart: MakeChart) -> Chart:
    cache = make_chart("cache", {"cm.yaml": "size"})
    db = make_chart("db", {"svc.yaml": "port"}, dependencies=[cache])
    return make_chart("web", {"deployment.yaml": "replicas"}, dependencies=[db])


class TestAllTemplates:
    def test_keys_are_chart_path_qualified(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        assert sorted(templates) == [
            "web/charts/db/charts/cache/templates/cm.yaml",
            "web/charts/db/templates/svc.yaml",
            "web/templates/deployment.yaml",
        ]

    def test_root_sees_all_values(self, tree: Chart) -> None:
        scope = all_templates(tree, RENDER_VALUES)["web/templates/deployment.yaml"]

        assert scope.values["Values"] == RENDER_VALUES["Values"]

    def test_sub_chart_sees_only_its_section(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        db_values = templates["web/charts/db/templates/svc.yaml"].values["Values"]
        cache_values = templates[
            "web/charts/db/charts/cache/templates/cm.yaml"
        ].values["Values"]

        assert db_values == {"port": 5432, "cache": {"size": 64}}
        assert "replicas" not in db_values
        assert cache_values == {"size": 64}

    def test_release_and_capabilities_are_inherited(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        cache = templates["web/charts/db/charts/cache/templates/cm.yaml"].values

        assert cache["Release"] == RENDER_VALUES["Release"]
        assert cache["Capabilities"] == RENDER_VALUES["Capabilities"]

    def test_chart_metadata_and_root_flag(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        root = templates["web/templates/deployment.yaml"].values["Chart"]
        db = templates["web/charts/db/templates/svc.yaml"].values["Chart"]

        assert root["Name"] == "web"
        assert root["IsRoot"] is True
        assert db["Name"] == "db"
        assert db["IsRoot"] is False

    def test_base_path_is_chart_templates_directory(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        db = templates["web/charts/db/templates/svc.yaml"]

        assert db.base_path == "web/charts/db/templates"
        assert db.template == "port"

    def test_subcharts_expose_child_scopes(self, tree: Chart) -> None:
        templates = all_templates(tree, RENDER_VALUES)

        root = templates["web/templates/deployment.yaml"].values
        db = templates["web/charts/db/templates/svc.yaml"].values

        assert root["Subcharts"]["db"] is db
        assert root["Subcharts"]["db"]["Values"]["port"] == 5432

    def test_missing_section_is_empty_table(self, tree: Chart) -> None:
        templates = all_templates(tree, {"Values": {"replicas": 1}})

        db_values = templates["web/charts/db/templates/svc.yaml"].values["Values"]

        assert db_values == Values()

    def test_non_table_section_is_empty_table(self, tree: Chart) -> None:
        templates = all_templates(tree, {"Values": {"db": "oops"}})

        db_values = templates["web/charts/db/templates/svc.yaml"].values["Values"]

        assert db_values == Values()

    def test_root_without_values_gets_empty_table(self, tree: Chart) -> None:
        templates = all_templates(tree, {})

        root = templates["web/templates/deployment.yaml"].values

        assert root["Values"] == Values()
        assert root["Release"] is None

    def test_library_chart_contributes_only_partials(
        self, make_chart: MakeChart
    ) -> None:
        common = make_chart(
            "common", {"_helpers.tpl": "", "cm.yaml": ""}, type="library"
        )
        web = make_chart("web", {"cm.yaml": ""}, dependencies=[common])

        templates = all_templates(web, {})

        assert sorted(templates) == [
            "web/charts/common/templates/_helpers.tpl",
            "web/templates/cm.yaml",
        ]

    def test_none_templates_are_skipped(self) -> None:
        chart = Chart(
            metadata=ChartMetadata(name="web"),
            templates=[None, ChartFile(name="templates/a.yaml", data=b"a")],
        )

        assert list(all_templates(chart, {})) == ["web/templates/a.yaml"]

    def test_files_are_exposed(self) -> None:
        chart = Chart(
            metadata=ChartMetadata(name="web"),
            templates=[ChartFile(name="templates/a.yaml", data=b"")],
            files=[ChartFile(name="app.ini", data=b"x=1")],
        )

        scope = all_templates(chart, {})["web/templates/a.yaml"].values

        assert isinstance(scope["Files"], Files)
        assert scope["Files"].get("app.ini") == "x=1"
