"""Unit tests for Node-style package resolution."""

import json
from pathlib import Path
from urllib.parse import unquote, urlsplit

import pytest

from esm_resolve.config import ResolverOptions
from esm_resolve.core.node import NodeResolver, split_specifier
from esm_resolve.core.packages import PackageLocator


def make_node(start_dir: Path, **options) -> NodeResolver:
    return NodeResolver(PackageLocator(str(start_dir)), ResolverOptions(**options))


def as_path(locator: str) -> str:
    parts = urlsplit(locator)
    assert parts.scheme == "file"
    return unquote(parts.path)


class TestSplitSpecifier:
    def test_bare(self):
        assert split_specifier("pkg/a/b.js") == (["pkg", "a", "b.js"], 1)

    def test_scoped(self):
        assert split_specifier("@scope/pkg/x") == (["@scope", "pkg", "x"], 2)

    @pytest.mark.parametrize("specifier", ["./x.js", "../x.js", "/abs/x.js", ""])
    def test_not_a_package(self, specifier):
        assert split_specifier(specifier) is None


class TestNodeResolver:
    def test_legacy_module_field(self, testdata):
        node = make_node(testdata)
        located = node.resolve("fake-package")
        assert as_path(located) == str(testdata / "node_modules" / "fake-package" / "esm.mjs")

    def test_literal_subpath(self, testdata):
        node = make_node(testdata)
        located = node.resolve("fake-package/index.js")
        assert as_path(located) == str(testdata / "node_modules" / "fake-package" / "index.js")

    def test_exports_keep_hash(self, testdata):
        node = make_node(testdata)
        located = node.resolve("exports-package")
        assert located.endswith("/node_modules/exports-package/node.js#browser")

    def test_relative_is_not_handled(self, testdata):
        assert make_node(testdata).resolve("./fake.js") is None

    def test_unknown_package(self, testdata):
        assert make_node(testdata).resolve("nothing-here") is None

    def test_internal_import_local(self, testdata):
        located = make_node(testdata / "deep").resolve("#self")
        assert as_path(located) == str(testdata / "blah" / "file.js")

    def test_internal_import_alias(self, testdata):
        located = make_node(testdata).resolve("#other")
        assert located.endswith("/exports-package/node.js#browser")

    def test_internal_import_missing(self, testdata):
        assert make_node(testdata).resolve("#nope") is None

    def test_internal_import_without_self_package(self, tmp_path):
        assert make_node(tmp_path).resolve("#secret") is None

    def test_nested_package(self, testdata):
        located = make_node(testdata).resolve("bad-package/subpackage")
        assert as_path(located).endswith("bad-package/subpackage/sub-bad-index.js")

    def test_nested_package_disabled(self, testdata):
        node = make_node(testdata, check_nested_packages=False)
        assert node.resolve("bad-package/subpackage") is None


class TestExportFallback:
    @pytest.fixture
    def strict_pkg(self, testdata):
        pkg = testdata / "node_modules" / "strict-package"
        pkg.mkdir()
        (pkg / "package.json").write_text(json.dumps({
            "name": "strict-package",
            "exports": {".": "./index.js", "./alias": "other-package"},
            "module": "legacy.js",
        }))
        (pkg / "index.js").write_text("")
        (pkg / "unlisted.js").write_text("")
        return pkg

    def test_fallback_to_literal(self, testdata, strict_pkg):
        located = make_node(testdata).resolve("strict-package/unlisted.js")
        assert as_path(located) == str(strict_pkg / "unlisted.js")

    def test_no_fallback(self, testdata, strict_pkg):
        node = make_node(testdata, allow_export_fallback=False)
        assert node.resolve("strict-package/unlisted.js") is None

    def test_non_local_export_rejected(self, testdata, strict_pkg):
        strict = make_node(testdata, allow_export_fallback=False)
        assert strict.resolve("strict-package/alias") is None

        lenient = make_node(testdata)
        assert as_path(lenient.resolve("strict-package/alias")) == str(strict_pkg / "alias")

    def test_exports_outrank_legacy(self, testdata, strict_pkg):
        located = make_node(testdata).resolve("strict-package")
        assert as_path(located) == str(strict_pkg / "index.js")

    @pytest.mark.parametrize("exports", [["./a.js"], 0, False])
    def test_blocked_exports_match_nothing(self, testdata, exports):
        pkg = testdata / "node_modules" / "blocked-package"
        pkg.mkdir()
        (pkg / "package.json").write_text(json.dumps({"exports": exports, "module": "legacy.js"}))
        (pkg / "legacy.js").write_text("")

        assert make_node(testdata, allow_export_fallback=False).resolve("blocked-package") is None
        located = make_node(testdata).resolve("blocked-package")
        assert as_path(located) == str(pkg / "legacy.js")

    @pytest.mark.parametrize("exports", ["", None])
    def test_empty_exports_not_declared(self, testdata, exports):
        pkg = testdata / "node_modules" / "empty-exports"
        pkg.mkdir()
        (pkg / "package.json").write_text(json.dumps({"exports": exports, "module": "legacy.js"}))

        located = make_node(testdata, allow_export_fallback=False).resolve("empty-exports")
        assert as_path(located) == str(pkg / "legacy.js")


class TestMainFallback:
    @pytest.fixture
    def cjs_pkg(self, testdata):
        pkg = testdata / "node_modules" / "cjs-package"
        pkg.mkdir()
        (pkg / "package.json").write_text(json.dumps({"name": "cjs-package", "main": "lib/main.js"}))
        return pkg

    def test_main_used_by_default(self, testdata, cjs_pkg):
        located = make_node(testdata).resolve("cjs-package")
        assert as_path(located) == str(cjs_pkg / "lib" / "main.js")

    def test_main_skipped_for_commonjs(self, testdata, cjs_pkg):
        located = make_node(testdata, include_main_fallback=False).resolve("cjs-package")
        assert as_path(located) == str(cjs_pkg)

    def test_main_used_for_module_type(self, testdata, cjs_pkg):
        (cjs_pkg / "package.json").write_text(json.dumps({
            "name": "cjs-package",
            "main": "lib/main.js",
            "type": "module",
        }))
        located = make_node(testdata, include_main_fallback=False).resolve("cjs-package")
        assert as_path(located) == str(cjs_pkg / "lib" / "main.js")
