"""Tests for framework preset detection."""

import pytest

from zerodeploy.core.models import Manifest
from zerodeploy.detection.frameworks import (
    FRAMEWORK_PRESETS,
    declared_framework,
    detect_framework,
    implied_framework,
    invoked_commands,
)


def manifest(build=None, deps=None, dev_deps=None):
    data = {}
    if build is not None:
        data["scripts"] = {"build": build}
    if deps:
        data["dependencies"] = deps
    if dev_deps:
        data["devDependencies"] = dev_deps
    return Manifest.model_validate(data)


class TestInvokedCommands:
    def test_simple(self):
        assert invoked_commands("next build") == ["next"]

    def test_chained_with_env_and_runner(self):
        script = "NODE_ENV=production npx next build && cp -r out dist"
        assert invoked_commands(script) == ["next", "cp"]

    def test_separators(self):
        assert invoked_commands("a; b || c | d") == ["a", "b", "c", "d"]

    def test_yarn_runner(self):
        assert invoked_commands("yarn gatsby build") == ["gatsby"]


class TestDetectFramework:
    @pytest.mark.parametrize(
        "build,package,expected",
        [
            ("next build", "next", "next"),
            ("nuxt build", "nuxt", "nuxt"),
            ("gatsby build", "gatsby", "gatsby"),
            ("react-scripts build", "react-scripts", "create-react-app"),
            ("vue-cli-service build", "@vue/cli-service", "vue-cli"),
        ],
    )
    def test_presets(self, build, package, expected):
        preset = detect_framework(manifest(build, deps={package: "1.0.0"}))
        assert preset is not None
        assert preset.name == expected

    def test_dev_dependency_counts(self):
        preset = detect_framework(manifest("next build", dev_deps={"next": "9.0.0"}))
        assert preset.name == "next"
        assert preset.builder_use == "@now/next"
        assert preset.entry_file == "package.json"

    def test_requires_both_signals(self):
        assert detect_framework(manifest("next build")) is None
        assert detect_framework(manifest(deps={"next": "9.0.0"})) is None
        assert detect_framework(manifest("webpack", deps={"next": "9.0.0"})) is None

    def test_none_manifest(self):
        assert detect_framework(None) is None

    def test_first_match_wins(self):
        both = manifest(
            "next build && nuxt build", deps={"next": "9.0.0", "nuxt": "2.8.1"}
        )
        assert detect_framework(both).name == "next"

    def test_static_build_presets_use_static_build_builder(self):
        for preset in FRAMEWORK_PRESETS:
            if preset.name != "next":
                assert preset.builder_use == "@now/static-build"


class TestPartialSignals:
    def test_implied_ignores_dependencies(self):
        assert implied_framework(manifest("gatsby build")).package == "gatsby"
        assert implied_framework(manifest("webpack")) is None

    def test_declared_ignores_build_script(self):
        assert declared_framework(manifest(deps={"nuxt": "2.8.1"})).name == "nuxt"
        assert declared_framework(manifest("nuxt build")) is None
