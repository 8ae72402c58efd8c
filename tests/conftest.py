"""
Shared fixtures.

`testdata` materializes a small project with a self package and a
node_modules tree exercising every resolution path.
"""

import json
from pathlib import Path

import pytest

SELF_PACKAGE_NAME = "fake-self-package"


def write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


def touch(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def testdata(tmp_path) -> Path:
    root = tmp_path / "testdata"

    # Self package
    write_json(root / "package.json", {
        "name": SELF_PACKAGE_NAME,
        "exports": {
            ".": "./blah/file.js",
            "./package.json": "./package.json",
        },
        "imports": {
            "#secret": "./blah/file.js#secret",
            "#self": "./blah/file.js",
            "#other": "exports-package",
            "#other-any/*": "exports-package/*",
        },
    })
    touch(root / "fake.js")
    touch(root / "blah" / "file.js")
    touch(root / "only-mjs.mjs")
    touch(root / "optional-mjs.js")
    touch(root / "optional-mjs.mjs")
    (root / "deep").mkdir()

    modules = root / "node_modules"

    # Legacy package without exports
    fake = modules / "fake-package"
    write_json(fake / "package.json", {
        "name": "fake-package",
        "main": "index.js",
        "module": "esm.mjs",
    })
    touch(fake / "index.js")
    touch(fake / "esm.mjs")
    touch(fake / "solo-types.d.ts")
    touch(fake / "peer-types.js")
    touch(fake / "peer-types.d.ts")

    # Conditional and pattern exports
    exports_pkg = modules / "exports-package"
    write_json(exports_pkg / "package.json", {
        "name": "exports-package",
        "exports": {
            ".": {
                "node": "./node.js#node",
                "browser": "./node.js#browser",
                "default": "./node.js#default",
            },
            "./foo/*": "./bar/*",
        },
    })
    touch(exports_pkg / "node.js")
    touch(exports_pkg / "bar" / "other.js")
    touch(exports_pkg / "bar" / "index.js")

    # Scoped package
    scoped = modules / "@user" / "thing"
    write_json(scoped / "package.json", {"name": "@user/thing", "module": "test.js"})
    touch(scoped / "test.js")

    # Package nested in a directory that is not itself a package
    nested = modules / "bad-package" / "subpackage"
    write_json(nested / "package.json", {"main": "sub-bad-index.js"})
    touch(nested / "sub-bad-index.js")

    return root


@pytest.fixture
def importer(testdata) -> Path:
    return testdata / "fake.js"


@pytest.fixture
def deep_importer(testdata) -> Path:
    return testdata / "deep" / "fake.js"
