# What it does: Turns the flat staging manifest into a hierarchy of tree objects and reads those trees back
# How it does: Splits every staged path on '/', hangs each file under an owned chain of DirectoryNode objects, then serializes the nodes bottom-up (children sorted by name) so each directory becomes a tree object whose hash depends only on its contents
# What data structure it uses: Merkle Tree (every tree hash covers the hashes of all its children), recursion for both building and reading

from collections import namedtuple

from . import objects
from .errors import InvalidInputError, CorruptObjectError

DIR_MODE = 0o40000
FILE_MODE = 0o100644
EXECUTABLE_MODE = 0o100755

TreeEntry = namedtuple('TreeEntry', ['mode', 'name', 'hash', 'kind'])
FileLeaf = namedtuple('FileLeaf', ['mode', 'hash'])


class DirectoryNode:
    """A directory during tree construction. Owns its children exclusively."""

    def __init__(self, name=''):
        self.name = name
        self.children = {}  # name -> DirectoryNode | FileLeaf

    def subdirectory(self, name): # Returns the child directory, creating it on first use
        child = self.children.get(name)
        if child is None:
            child = DirectoryNode(name)
            self.children[name] = child
        elif not isinstance(child, DirectoryNode):
            raise InvalidInputError(f"'{name}' is staged both as a file and as a directory")
        return child

    def add_file(self, name, mode, sha1):
        if isinstance(self.children.get(name), DirectoryNode):
            raise InvalidInputError(f"'{name}' is staged both as a file and as a directory")
        self.children[name] = FileLeaf(mode, sha1)


def split_path(path): # Splits a repository-relative '/'-separated path, rejecting anything that would not form a strict tree
    if not path or path.startswith('/'):
        raise InvalidInputError(f"Malformed path: {path!r}")
    parts = path.split('/')
    for part in parts:
        if part in ('', '.', '..') or '\0' in part:
            raise InvalidInputError(f"Malformed path: {path!r}")
    return parts


def build_tree_from_index(entries): # Builds the DirectoryNode hierarchy from {path: (hash, mode)}
    if not entries:
        raise InvalidInputError("no entries to create tree from")

    root = DirectoryNode()
    for path, (sha1, mode) in entries.items():
        parts = split_path(path)
        current = root
        for part in parts[:-1]:
            current = current.subdirectory(part)
        current.add_file(parts[-1], mode, sha1)
    return root


def serialize_tree(entries): # Encodes entries as "<mode-octal> <name>\0<20 raw hash bytes>", sorted by name
    content = bytearray()
    for entry in sorted(entries, key=lambda e: e.name):
        content += f"{entry.mode:o} {entry.name}\0".encode()
        try:
            raw_hash = bytes.fromhex(entry.hash)
        except ValueError as e:
            raise InvalidInputError(f"Invalid hash for '{entry.name}': {entry.hash!r}") from e
        if len(raw_hash) != 20:
            raise InvalidInputError(f"Invalid hash for '{entry.name}': {entry.hash!r}")
        content += raw_hash
    return bytes(content)


def parse_tree(content): # Decodes the bytes written by serialize_tree back into TreeEntry tuples
    entries = []
    pos = 0
    while pos < len(content):
        space = content.find(b' ', pos)
        null = content.find(b'\0', pos)
        if space == -1 or null == -1 or space > null:
            raise CorruptObjectError("Malformed tree entry header")
        if null + 21 > len(content):
            raise CorruptObjectError("Truncated tree entry hash")

        try:
            mode = int(content[pos:space].decode('ascii'), 8)
            name = content[space + 1:null].decode()
        except ValueError as e:
            raise CorruptObjectError("Malformed tree entry") from e

        sha1 = content[null + 1:null + 21].hex()
        kind = objects.TREE if mode == DIR_MODE else objects.BLOB
        entries.append(TreeEntry(mode, name, sha1, kind))
        pos = null + 21
    return entries


def write_tree(repo_root, node): #Recursively writes a tree object from a DirectoryNode and returns its hash
    entries = []
    for name in sorted(node.children):
        child = node.children[name]
        if isinstance(child, DirectoryNode):
            # It's a subdirectory, store it first so its hash is known
            entries.append(TreeEntry(DIR_MODE, name, write_tree(repo_root, child), objects.TREE))
        else:
            entries.append(TreeEntry(child.mode, name, child.hash, objects.BLOB))

    return objects.store_object(repo_root, objects.TREE, serialize_tree(entries))


def create_tree_from_index(repo_root, entries): # Stores the whole hierarchy for {path: (hash, mode)} and returns the root tree hash
    root = build_tree_from_index(entries)
    return write_tree(repo_root, root)


def read_tree(repo_root, tree_hash):
    return parse_tree(objects.read_object(repo_root, tree_hash, objects.TREE))


def get_tree_files(repo_root, tree_hash): # Flattens a tree into {path: blob hash}
    files = {}

    def read_tree_recursive(tree_sha, path_prefix=""):
        for entry in read_tree(repo_root, tree_sha):
            current_path = f"{path_prefix}/{entry.name}" if path_prefix else entry.name
            if entry.kind == objects.TREE:
                read_tree_recursive(entry.hash, current_path)
            else:
                files[current_path] = entry.hash

    read_tree_recursive(tree_hash)
    return files
