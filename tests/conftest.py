"""Shared fixtures for cratestage tests."""

import os

import pytest
from click.testing import CliRunner


def _make_tree(root, layout):
    """Create files under *root* from ``{relpath: content}``.

    A relpath ending in ``/`` creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in layout.items():
        p = root / rel
        if rel.endswith("/"):
            p.mkdir(parents=True, exist_ok=True)
            continue
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content)
    return root


def _snapshot(root):
    """Return ``{relpath: bytes or None}`` for everything under *root*.

    Directories map to None.
    """
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for d in dirnames:
            rel = os.path.relpath(os.path.join(dirpath, d), root)
            result[rel.replace(os.sep, "/")] = None
        for f in filenames:
            full = os.path.join(dirpath, f)
            rel = os.path.relpath(full, root)
            with open(full, "rb") as fh:
                result[rel.replace(os.sep, "/")] = fh.read()
    return result


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def crate_src(tmp_path):
    """A small crate-like source tree with hidden entries at several levels.

    Tree:
        Cargo.toml, README.md, .gitignore,
        src/lib.rs, src/bin/main.rs, src/.cache/blob,
        .git/HEAD, .git/objects/ab/cd,
        tests/
    """
    return _make_tree(tmp_path / "crate", {
        "Cargo.toml": "[package]\nname = \"demo\"\n",
        "README.md": "demo crate\n",
        ".gitignore": "target/\n",
        "src/lib.rs": "pub fn f() {}\n",
        "src/bin/main.rs": "fn main() {}\n",
        "src/.cache/blob": b"\x00\x01",
        ".git/HEAD": "ref: refs/heads/main\n",
        ".git/objects/ab/cd": b"\xff",
        "tests/": None,
    })


@pytest.fixture
def dest(tmp_path):
    """A not-yet-created destination path."""
    return tmp_path / "sandbox" / "crate"


@pytest.fixture
def make_tree():
    return _make_tree


@pytest.fixture
def snapshot():
    return _snapshot
