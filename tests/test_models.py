"""Tests for result types, manifests and deployment documents."""

import json

import pytest
from pydantic import ValidationError

from zerodeploy.core.models import (
    MISSING_BUILD_SCRIPT,
    BuilderSpec,
    BuildersResult,
    DeploymentConfig,
    DetectionOutcome,
    Diagnostic,
    Manifest,
    RouteRule,
    RoutesResult,
)

DIAG = Diagnostic(code=MISSING_BUILD_SCRIPT, message="no build")


class TestBuildersResult:
    def test_outcomes(self):
        ok = BuildersResult.success([BuilderSpec(src="api/a.js", use="@now/node")])
        assert ok.outcome == DetectionOutcome.SUCCESS
        assert ok.errors is None
        assert BuildersResult.failure([DIAG]).outcome == DetectionOutcome.FAILURE
        assert BuildersResult.noop().outcome == DetectionOutcome.NOOP

    def test_mutually_exclusive(self):
        with pytest.raises(ValidationError):
            BuildersResult(
                builders=[BuilderSpec(src="a", use="b")], errors=[DIAG]
            )

    def test_empty_lists_are_none(self):
        result = BuildersResult(builders=[], errors=[])
        assert result.builders is None
        assert result.errors is None


class TestRoutesResult:
    def test_mutually_exclusive(self):
        with pytest.raises(ValidationError):
            RoutesResult(default_routes=[], error=DIAG)

    def test_empty_table_is_success(self):
        assert RoutesResult.success([]).outcome == DetectionOutcome.SUCCESS
        assert RoutesResult.failure(DIAG).outcome == DetectionOutcome.FAILURE
        assert RoutesResult.noop().outcome == DetectionOutcome.NOOP

    def test_alias(self):
        result = RoutesResult.model_validate({"defaultRoutes": [{"src": "/(.*)"}]})
        assert result.default_routes[0].src == "/(.*)"
        assert "defaultRoutes" in result.model_dump(by_alias=True)


class TestSerialization:
    def test_unset_fields_are_omitted(self):
        assert RouteRule(src="^/api(\\/.*)?$", status=404).to_dict() == {
            "src": "^/api(\\/.*)?$",
            "status": 404,
        }
        assert BuilderSpec(src="a", use="b").to_dict() == {"src": "a", "use": "b"}

    def test_deployment_json(self):
        doc = DeploymentConfig(
            builds=[BuilderSpec(src="api/a.js", use="@now/node", config={"zeroConfig": True})],
            routes=[RouteRule(src="^/api/(a|a\\.js)$", dest="/api/a.js")],
        )
        data = json.loads(doc.to_json())
        assert data["builds"][0] == {
            "src": "api/a.js",
            "use": "@now/node",
            "config": {"zeroConfig": True},
        }
        assert data["routes"][0]["dest"] == "/api/a.js"

    def test_deployment_yaml_round_trip(self, tmp_path):
        doc = DeploymentConfig(
            builds=[BuilderSpec(src="public/**/*", use="@now/static")],
            routes=[RouteRule(src="/(.*)", dest="/public/$1")],
        )
        path = tmp_path / "out" / "deploy.yaml"
        doc.to_yaml(path)
        assert path.read_text().startswith("builds:")
        assert DeploymentConfig.from_yaml(path) == doc


class TestManifest:
    def test_dev_dependencies_alias(self):
        manifest = Manifest.model_validate({"devDependencies": {"next": "9.0.0"}})
        assert manifest.has_dependency("next")
        assert manifest.dev_dependencies == {"next": "9.0.0"}

    def test_unknown_keys_ignored(self):
        manifest = Manifest.from_raw({"name": "app", "version": "1.0.0"})
        assert manifest is not None
        assert manifest.build_script is None

    def test_blank_values(self):
        manifest = Manifest.from_raw(
            {"scripts": {"build": "  "}, "engines": {"node": ""}}
        )
        assert manifest.build_script is None
        assert manifest.node_engine is None

    def test_from_raw_rejects_non_objects(self, caplog):
        with caplog.at_level("WARNING"):
            assert Manifest.from_raw("package") is None
            assert Manifest.from_raw(["next"]) is None
        assert "Ignoring manifest" in caplog.text

    def test_wrongly_typed_section_is_dropped_alone(self, caplog):
        with caplog.at_level("WARNING"):
            manifest = Manifest.from_raw(
                {"scripts": {"build": "next build"}, "dependencies": ["next"]}
            )
        assert manifest.build_script == "next build"
        assert manifest.dependencies == {}
        assert "`dependencies`" in caplog.text

    def test_wrongly_typed_entries_are_dropped_alone(self, caplog):
        with caplog.at_level("WARNING"):
            manifest = Manifest.from_raw(
                {
                    "scripts": {"build": "next build", "test": None},
                    "engines": {"node": 10, "npm": "6.x"},
                }
            )
        assert manifest.scripts == {"build": "next build"}
        assert manifest.engines == {"npm": "6.x"}
        assert manifest.node_engine is None
        assert "scripts.test" in caplog.text
        assert "engines.node" in caplog.text

    def test_from_raw_passthrough(self):
        manifest = Manifest()
        assert Manifest.from_raw(manifest) is manifest
        assert Manifest.from_raw(None) is None
