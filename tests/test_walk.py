"""Tests for the flattened pre-order walk."""

import pytest

from cratestage import UnclassifiableNameError, is_hidden, walk_dir


def names(entries):
    return [(e.depth, e.name) for e in entries]


class TestWalkDir:
    def test_preorder_with_depths(self, tmp_path, make_tree):
        root = make_tree(tmp_path / "root", {
            "a/x.txt": "x",
            "a/b/y.txt": "y",
            "c.txt": "c",
        })
        assert names(walk_dir(root)) == [
            (0, "root"),
            (1, "a"),
            (2, "b"),
            (3, "y.txt"),
            (2, "x.txt"),
            (1, "c.txt"),
        ]

    def test_prune_skips_subtree(self, tmp_path, make_tree):
        root = make_tree(tmp_path / "root", {"skip/inner.txt": "i", "keep.txt": "k"})
        seen = []

        def prune(entry):
            seen.append(entry.name)
            return entry.name == "skip"

        assert names(walk_dir(root, prune=prune)) == [(0, "root"), (1, "keep.txt")]
        assert "inner.txt" not in seen

    def test_hidden_root_pruned(self, tmp_path, make_tree):
        root = make_tree(tmp_path / ".root", {"f": "f"})
        assert list(walk_dir(root, prune=lambda e: e.hidden)) == []

    def test_root_offered_to_prune(self, tmp_path, make_tree):
        root = make_tree(tmp_path / "root", {"f": "f"})
        seen = []
        list(walk_dir(root, prune=lambda e: seen.append((e.depth, e.name))))
        assert seen == [(0, "root"), (1, "f")]

    def test_parent_ref_root_named_after_directory(self, tmp_path, make_tree, monkeypatch):
        root = make_tree(tmp_path / "root", {"sub/": None})
        monkeypatch.chdir(root / "sub")
        top = next(walk_dir(".."))
        assert top.name == "root"
        assert not top.hidden

    def test_kinds(self, tmp_path, make_tree):
        root = make_tree(tmp_path / "root", {"d/": None, "f": "f"})
        entries = {e.name: e for e in walk_dir(root)}
        assert entries["root"].is_dir
        assert entries["d"].is_dir and not entries["d"].is_file
        assert entries["f"].is_file and not entries["f"].is_dir

    def test_file_root(self, tmp_path):
        f = tmp_path / "only.txt"
        f.write_text("x")
        entries = list(walk_dir(f))
        assert names(entries) == [(0, "only.txt")]
        assert entries[0].is_file

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(walk_dir(tmp_path / "missing"))


class TestIsHidden:
    @pytest.mark.parametrize("name,expected", [
        (".git", True),
        (".", True),
        ("src", False),
        ("a.b", False),
        ("", False),
    ])
    def test_classification(self, name, expected):
        assert is_hidden(name) is expected

    def test_undecodable_name(self):
        with pytest.raises(UnclassifiableNameError):
            is_hidden("\udcff.rs")
