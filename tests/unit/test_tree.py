# Unit tests for utils/tree.py

import pytest
import os
import sys
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'minigit-project'))

from utils import objects, tree
from utils.tree import TreeEntry, DirectoryNode, FileLeaf, DIR_MODE, FILE_MODE, EXECUTABLE_MODE
from utils.errors import InvalidInputError, CorruptObjectError


def _blob(repo_root, content):
    return objects.store_object(repo_root, 'blob', content)


def _sample_entries(repo_root):
    return {
        'README.md': (_blob(repo_root, b'readme'), FILE_MODE),
        'src/main.py': (_blob(repo_root, b'main'), FILE_MODE),
        'src/util/helpers.py': (_blob(repo_root, b'helpers'), FILE_MODE),
        'docs/guide.md': (_blob(repo_root, b'guide'), FILE_MODE),
        'bin/run.sh': (_blob(repo_root, b'#!/bin/sh'), EXECUTABLE_MODE),
    }


def _subtree_hash(repo_root, root_hash, dir_path):
    current = root_hash
    for part in dir_path.split('/'):
        entries = {e.name: e for e in tree.read_tree(repo_root, current)}
        current = entries[part].hash
    return current


class TestBuildTreeFromIndex:
    """Tests for tree.build_tree_from_index()"""

    def test_empty_input_rejected(self):
        with pytest.raises(InvalidInputError):
            tree.build_tree_from_index({})

    def test_nested_structure(self):
        root = tree.build_tree_from_index({
            'a.txt': ('1' * 40, FILE_MODE),
            'dir/b.txt': ('2' * 40, FILE_MODE),
            'dir/sub/c.txt': ('3' * 40, FILE_MODE),
        })

        assert root.children['a.txt'] == FileLeaf(FILE_MODE, '1' * 40)
        assert isinstance(root.children['dir'], DirectoryNode)
        assert root.children['dir'].children['b.txt'].hash == '2' * 40
        assert root.children['dir'].children['sub'].children['c.txt'].hash == '3' * 40

    def test_shared_prefix_reuses_directory(self):
        root = tree.build_tree_from_index({
            'dir/a.txt': ('1' * 40, FILE_MODE),
            'dir/b.txt': ('2' * 40, FILE_MODE),
        })
        assert list(root.children) == ['dir']
        assert sorted(root.children['dir'].children) == ['a.txt', 'b.txt']

    @pytest.mark.parametrize('path', ['', '/abs.txt', 'a//b.txt', 'dir/', './a.txt', 'a/../b.txt'])
    def test_malformed_paths_rejected(self, path):
        with pytest.raises(InvalidInputError):
            tree.build_tree_from_index({path: ('1' * 40, FILE_MODE)})

    def test_file_and_directory_conflict(self):
        with pytest.raises(InvalidInputError):
            tree.build_tree_from_index({
                'a': ('1' * 40, FILE_MODE),
                'a/b.txt': ('2' * 40, FILE_MODE),
            })


class TestSerializeTree:
    """Tests for tree.serialize_tree() / tree.parse_tree()"""

    def test_wire_format(self):
        content = tree.serialize_tree([TreeEntry(FILE_MODE, 'a.txt', 'ab' * 20, 'blob')])
        assert content == b'100644 a.txt\x00' + bytes.fromhex('ab' * 20)

    def test_directory_mode_string(self):
        content = tree.serialize_tree([TreeEntry(DIR_MODE, 'src', 'cd' * 20, 'tree')])
        assert content.startswith(b'40000 src\x00')

    def test_entries_sorted_by_name(self):
        entries = [
            TreeEntry(FILE_MODE, 'zeta', '01' * 20, 'blob'),
            TreeEntry(DIR_MODE, 'alpha', '02' * 20, 'tree'),
            TreeEntry(FILE_MODE, 'mid', '03' * 20, 'blob'),
        ]
        names = [e.name for e in tree.parse_tree(tree.serialize_tree(entries))]
        assert names == ['alpha', 'mid', 'zeta']

    def test_round_trip_preserves_entry_set(self):
        rng = random.Random(7)
        entries = set()
        for i in range(25):
            is_dir = rng.random() < 0.3
            entries.add(TreeEntry(
                DIR_MODE if is_dir else rng.choice([FILE_MODE, EXECUTABLE_MODE]),
                f"name {i} é",
                '%040x' % rng.getrandbits(160),
                'tree' if is_dir else 'blob',
            ))

        assert set(tree.parse_tree(tree.serialize_tree(list(entries)))) == entries

    def test_invalid_hash_rejected(self):
        with pytest.raises(InvalidInputError):
            tree.serialize_tree([TreeEntry(FILE_MODE, 'a', 'xyz', 'blob')])

    def test_truncated_tree_is_corrupt(self):
        content = tree.serialize_tree([TreeEntry(FILE_MODE, 'a', 'ab' * 20, 'blob')])
        with pytest.raises(CorruptObjectError):
            tree.parse_tree(content[:-5])

    def test_missing_header_is_corrupt(self):
        with pytest.raises(CorruptObjectError):
            tree.parse_tree(b'garbage-without-separators')


class TestCreateTreeFromIndex:
    """Tests for tree.create_tree_from_index() and the Merkle property"""

    def test_root_hash_is_stable(self, temp_repo):
        entries = _sample_entries(temp_repo)
        assert tree.create_tree_from_index(temp_repo, entries) == tree.create_tree_from_index(temp_repo, entries)

    def test_root_hash_ignores_input_order(self, temp_repo):
        entries = _sample_entries(temp_repo)
        reversed_entries = dict(reversed(list(entries.items())))
        assert tree.create_tree_from_index(temp_repo, entries) == tree.create_tree_from_index(temp_repo, reversed_entries)

    def test_single_leaf_change_only_touches_ancestors(self, temp_repo):
        entries = _sample_entries(temp_repo)
        before = tree.create_tree_from_index(temp_repo, entries)

        changed = dict(entries)
        changed['src/util/helpers.py'] = (_blob(temp_repo, b'helpers v2'), FILE_MODE)
        after = tree.create_tree_from_index(temp_repo, changed)

        # The changed leaf's ancestor chain differs
        assert before != after
        assert _subtree_hash(temp_repo, before, 'src') != _subtree_hash(temp_repo, after, 'src')
        assert _subtree_hash(temp_repo, before, 'src/util') != _subtree_hash(temp_repo, after, 'src/util')

        # Sibling subtrees are untouched
        assert _subtree_hash(temp_repo, before, 'docs') == _subtree_hash(temp_repo, after, 'docs')
        assert _subtree_hash(temp_repo, before, 'bin') == _subtree_hash(temp_repo, after, 'bin')

    def test_mode_is_part_of_hash(self, temp_repo):
        sha1 = _blob(temp_repo, b'script')
        regular = tree.create_tree_from_index(temp_repo, {'run': (sha1, FILE_MODE)})
        executable = tree.create_tree_from_index(temp_repo, {'run': (sha1, EXECUTABLE_MODE)})
        assert regular != executable

    def test_stored_entries(self, temp_repo):
        entries = _sample_entries(temp_repo)
        root_hash = tree.create_tree_from_index(temp_repo, entries)

        root_entries = tree.read_tree(temp_repo, root_hash)
        assert [e.name for e in root_entries] == ['README.md', 'bin', 'docs', 'src']
        kinds = {e.name: (e.kind, e.mode) for e in root_entries}
        assert kinds['src'] == ('tree', DIR_MODE)
        assert kinds['README.md'] == ('blob', FILE_MODE)

    def test_get_tree_files_flattens(self, temp_repo):
        entries = _sample_entries(temp_repo)
        root_hash = tree.create_tree_from_index(temp_repo, entries)

        assert tree.get_tree_files(temp_repo, root_hash) == {path: sha1 for path, (sha1, _) in entries.items()}
