"""Tests for artifact rendering, schema gating and the console report."""

from __future__ import annotations

import io
import json
from pathlib import Path

import jsonschema
import pytest
from rich.console import Console

from route_audit.model import RoutingMode
from route_audit.model.route import ExtractionResult, ExtractionStats
from route_audit.reports.emitter import (
    ARTIFACT_FILENAMES,
    COMPLETE_FILE,
    FULL_URLS_FILE,
    ROUTES_FILE,
    RouteReport,
    render_artifacts,
    write_artifacts,
)


def _result(routes: list[str], prefix: str = "#/") -> ExtractionResult:
    return ExtractionResult(
        routes=routes,
        hash_prefix=prefix,
        stats=ExtractionStats(
            routing_modules=4, html_files=2, ts_files=1, total=len(routes), unique=5
        ),
        generated_at="2000-01-01T00:00:00+00:00",
        trace=["📂 Scanning: src/app/app-routing.module.ts", "  ├─ a → a"],
        routing_files=["src/app/app-routing.module.ts"],
    )


class TestExtractionResult:
    def test_full_urls_use_uniform_prefix(self):
        assert _result(["a", "b/c"]).full_urls == ["#/a", "#/b/c"]
        assert _result(["a"], prefix="/").full_urls == ["/a"]

    def test_routing_mode(self):
        assert _result([]).routing_mode is RoutingMode.HASH
        assert _result([], prefix="/").routing_mode is RoutingMode.HTML5

    def test_complete_record_shape(self):
        data = _result(["a", "b"]).to_dict()
        assert data == {
            "metadata": {
                "totalRoutes": 2,
                "routingMode": "Hash",
                "generatedAt": "2000-01-01T00:00:00+00:00",
                "stats": {"routingModules": 4, "htmlFiles": 2, "tsFiles": 1, "total": 2},
            },
            "routes": ["a", "b"],
            "fullUrls": ["#/a", "#/b"],
        }


class TestArtifacts:
    def test_render_all_three(self):
        rendered = render_artifacts(_result(["a", "b"]))
        assert tuple(rendered) == ARTIFACT_FILENAMES
        assert json.loads(rendered[ROUTES_FILE]) == ["a", "b"]
        assert json.loads(rendered[FULL_URLS_FILE]) == ["#/a", "#/b"]
        assert json.loads(rendered[COMPLETE_FILE])["metadata"]["totalRoutes"] == 2
        assert all(text.endswith("\n") for text in rendered.values())

    def test_write_creates_out_dir(self, tmp_path: Path):
        out = tmp_path / "nested" / "out"
        written = write_artifacts(_result(["a"]), out)
        assert [p.name for p in written] == list(ARTIFACT_FILENAMES)
        assert json.loads((out / ROUTES_FILE).read_text(encoding="utf-8")) == ["a"]

    def test_write_overwrites_previous_run(self, tmp_path: Path):
        write_artifacts(_result(["a", "b"]), tmp_path)
        write_artifacts(_result(["c"]), tmp_path)
        assert json.loads((tmp_path / ROUTES_FILE).read_text(encoding="utf-8")) == ["c"]

    @pytest.mark.parametrize("routes", [["a", "a"], ["users/:id"], ["**"], [""]])
    def test_invalid_result_writes_nothing(self, tmp_path: Path, routes):
        with pytest.raises(jsonschema.ValidationError):
            write_artifacts(_result(routes), tmp_path)
        assert not any((tmp_path / name).exists() for name in ARTIFACT_FILENAMES)


class TestRouteReport:
    @staticmethod
    def _report(**kwargs) -> tuple[RouteReport, io.StringIO]:
        buf = io.StringIO()
        console = Console(file=buf, width=120, color_system=None)
        return RouteReport(console, **kwargs), buf

    def test_render_includes_steps_and_outputs(self, tmp_path: Path):
        report, buf = self._report()
        result = _result(["a", "b"])
        report.render(result, [tmp_path / name for name in ARTIFACT_FILENAMES])
        out = buf.getvalue()

        assert "Hash Routing (#/)" in out
        for n in range(1, 6):
            assert f"STEP {n}" in out
        assert "Scanning: src/app/app-routing.module.ts" in out
        assert "Found 1 routing module files" in out
        assert "Total Routes Found: 2" in out
        assert "#/a" in out and "#/b" in out
        assert "routes-complete.json - Complete metadata and stats" in out

    def test_sample_is_truncated(self):
        report, buf = self._report(sample_size=2)
        report.summary(_result(["a", "b", "c", "d"]))
        out = buf.getvalue()
        assert "#/b" in out and "#/c" not in out
        assert "... and 2 more routes" in out

    def test_inventory_preview_is_truncated(self):
        report, buf = self._report()
        report.routing_files([f"src/app/m{i}-routing.module.ts" for i in range(12)])
        out = buf.getvalue()
        assert "Found 12 routing module files" in out
        assert "m9-routing" in out and "m10-routing" not in out
        assert "... and 2 more" in out

    def test_examples_list_matching_routes(self):
        report, buf = self._report(example_lookups=("Profile", "Missing"))
        report.examples(_result(["settings/Profile", "Profile", "home"]))
        out = buf.getvalue()
        assert "Profile:" in out
        assert "→ #/settings/Profile" in out
        assert "Missing" not in out

    def test_html5_header(self):
        report, buf = self._report()
        report.header(RoutingMode.HTML5)
        assert "HTML5 Mode" in buf.getvalue()
