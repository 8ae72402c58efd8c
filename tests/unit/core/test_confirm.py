"""Unit tests for filesystem path confirmation."""

import pytest

from esm_resolve.config import INERT_PLACEHOLDER, ResolverOptions
from esm_resolve.core.confirm import PathConfirmer


@pytest.fixture
def confirmer():
    return PathConfirmer(ResolverOptions())


class TestPathConfirmer:
    def test_existing_file_unchanged(self, testdata, confirmer):
        path = str(testdata / "blah" / "file.js")
        assert confirmer.confirm(path) == path

    def test_probes_js_extension(self, testdata, confirmer):
        path = str(testdata / "optional-mjs")
        assert confirmer.confirm(path) == path + ".js"

    def test_mjs_only_when_enabled(self, testdata, confirmer):
        path = str(testdata / "only-mjs")
        assert confirmer.confirm(path) is None

        mjs = PathConfirmer(ResolverOptions(match_naked_mjs=True))
        assert mjs.confirm(path) == path + ".mjs"

    def test_directory_index(self, testdata, confirmer):
        directory = testdata / "node_modules" / "exports-package" / "bar"
        assert confirmer.confirm(str(directory)) == str(directory / "index.js")

    def test_directory_without_index(self, testdata, confirmer):
        assert confirmer.confirm(str(testdata / "deep")) is None

    def test_missing(self, testdata, confirmer):
        assert confirmer.confirm(str(testdata / "nope.js")) is None


class TestPeerTypes:
    @pytest.fixture
    def pkg(self, testdata):
        return testdata / "node_modules" / "fake-package"

    @pytest.mark.parametrize("name", ["solo-types", "solo-types.js"])
    def test_declaration_only_is_hidden(self, pkg, confirmer, name):
        assert confirmer.confirm(str(pkg / name)) == INERT_PLACEHOLDER

    def test_peer_script_wins(self, pkg, confirmer):
        path = str(pkg / "peer-types.js")
        assert confirmer.confirm(path) == path

    def test_disabled(self, pkg):
        confirmer = PathConfirmer(ResolverOptions(rewrite_peer_types=False))
        assert confirmer.confirm(str(pkg / "solo-types.js")) is None

    def test_solo_index_declaration(self, tmp_path, confirmer):
        (tmp_path / "types").mkdir()
        (tmp_path / "types" / "index.d.ts").write_text("export type X = 1;")

        assert confirmer.confirm(str(tmp_path / "types")) == INERT_PLACEHOLDER
