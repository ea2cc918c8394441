# What it does: Provides centralized read/write operations for the .minigit/index file (the staging manifest)
# How it does: The index is a JSON object {path: {path, hash, mode, size, mtime_ns}}. Every mutation takes the index lock, re-reads the file, applies the change and atomically replaces the whole file
# What data structure it uses: Dictionary (mapping file paths to immutable IndexEntry tuples)

import json
import os
from collections import namedtuple

from .errors import CorruptObjectError, IOFailureError
from .lockfile import LockFile

IndexEntry = namedtuple('IndexEntry', ['path', 'hash', 'mode', 'size', 'mtime_ns'])


def get_index_path(repo_root):
    return os.path.join(repo_root, '.minigit', 'index')


def read_index(repo_root):
    """
    Reads the index file and returns a new dictionary {path: IndexEntry}.
    A missing index is an empty staging area. The caller owns the returned
    dict; changing it does not touch the index on disk.
    """
    index_path = get_index_path(repo_root)
    try:
        with open(index_path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise IOFailureError(f"Failed to read index: {e}") from e

    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
        return {
            path: IndexEntry(path, value['hash'], int(value['mode']), int(value['size']), int(value['mtime_ns']))
            for path, value in data.items()
        }
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise CorruptObjectError(f"Index file is corrupt: {e}") from e


def read_index_hashes(repo_root):
    return {path: entry.hash for path, entry in read_index(repo_root).items()}


def is_index_empty(repo_root):
    return not read_index(repo_root)


def serialize_index(index_dict): # JSON text of the whole index, as written to disk
    data = {path: entry._asdict() for path, entry in sorted(index_dict.items())}
    return json.dumps(data, indent=2) + '\n'


def write_index(repo_root, index_dict): # Replaces the whole index with `index_dict`
    with LockFile(get_index_path(repo_root)) as lock:
        lock.write(serialize_index(index_dict))


def _modify_index(repo_root, change): # Read-modify-write under the index lock
    with LockFile(get_index_path(repo_root)) as lock:
        index = read_index(repo_root)
        if change(index):
            lock.write(serialize_index(index))
    return index


def update_index_entry(repo_root, path, hash_val, mode, size=0, mtime_ns=0): # Upserts one entry, last write for a path wins
    entry = IndexEntry(path, hash_val, mode, size, mtime_ns)

    def change(index):
        index[path] = entry
        return True

    _modify_index(repo_root, change)
    return entry


def remove_index_entry(repo_root, path): # Returns True if the path was staged
    removed = []

    def change(index):
        if path in index:
            del index[path]
            removed.append(path)
            return True
        return False

    _modify_index(repo_root, change)
    return bool(removed)


def clear_index(repo_root):
    write_index(repo_root, {})
