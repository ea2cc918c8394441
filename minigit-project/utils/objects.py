# What it does: Manages the low-level object database, handling the storage and retrieval of all blobs, trees, and commits
# How it does: It implements a content-addressed storage system. `store_object` compresses `"<kind> <size>\0" + content` and saves it under its SHA-1 hash, skipping the write when the object is already there. `load_object` reads it back and checks the header
# What data structure it uses: Hash Table / Dictionary (the entire object store is a content-addressed dictionary where the SHA-1 hash is the key)

import os
import hashlib
import string
import tempfile
import zlib
from collections import namedtuple

from .errors import NotFoundError, InvalidInputError, CorruptObjectError, IOFailureError

BLOB = 'blob'
TREE = 'tree'
COMMIT = 'commit'
OBJECT_KINDS = (BLOB, TREE, COMMIT)

DIGEST_LENGTH = 40

Object = namedtuple('Object', ['kind', 'size', 'content', 'hash'])


def objects_dir(repo_root):
    return os.path.join(repo_root, '.minigit', 'objects')


def _encode(kind, content): # Canonical byte sequence the hash is computed over and that gets compressed to disk
    if kind not in OBJECT_KINDS:
        raise InvalidInputError(f"Unknown object kind: {kind!r}")
    return f'{kind} {len(content)}\0'.encode() + content


def hash_object(kind, content): # Pure function: same kind and bytes always give the same digest
    return hashlib.sha1(_encode(kind, content)).hexdigest()


def validate_digest(digest):
    if (not isinstance(digest, str) or len(digest) != DIGEST_LENGTH
            or any(c not in string.hexdigits for c in digest)):
        raise InvalidInputError(f"Not a valid object name: {digest!r}")
    return digest.lower()


def object_path(repo_root, digest): # First two hex characters are the fan-out directory, the rest is the filename
    digest = validate_digest(digest)
    return os.path.join(objects_dir(repo_root), digest[:2], digest[2:])


def object_exists(repo_root, digest):
    return os.path.isfile(object_path(repo_root, digest))


def store_object(repo_root, kind, content): # Writes the object if it is not stored yet and returns its hash
    data = _encode(kind, content)
    sha1 = hashlib.sha1(data).hexdigest()

    path = object_path(repo_root, sha1)
    if os.path.exists(path):
        return sha1

    object_dir = os.path.dirname(path)
    try:
        os.makedirs(object_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=object_dir, prefix='tmp_obj_')
    except OSError as e:
        raise IOFailureError(f"Failed to create object directory {object_dir}: {e}") from e

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(zlib.compress(data))
        os.chmod(tmp_path, 0o444)
        os.replace(tmp_path, path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        # A concurrent writer may have stored the same bytes first
        if os.path.exists(path):
            return sha1
        raise IOFailureError(f"Failed to write object {sha1}: {e}") from e

    return sha1


def load_object(repo_root, sha1): # Reads an object by its SHA-1 hash and returns an Object(kind, size, content, hash)
    path = object_path(repo_root, sha1)

    try:
        with open(path, 'rb') as f:
            compressed_data = f.read()
    except FileNotFoundError:
        raise NotFoundError(f"Object not found: {sha1}")
    except OSError as e:
        raise IOFailureError(f"Failed to read object {sha1}: {e}") from e

    try:
        data = zlib.decompress(compressed_data)
    except zlib.error as e:
        raise CorruptObjectError(f"Object {sha1} cannot be decompressed: {e}") from e

    null_byte_index = data.find(b'\0')
    if null_byte_index == -1:
        raise CorruptObjectError(f"Object {sha1} has no header terminator")

    try:
        header = data[:null_byte_index].decode('ascii')
        kind, size = header.split(' ')
        size = int(size)
    except ValueError as e:
        raise CorruptObjectError(f"Object {sha1} has a malformed header") from e

    if kind not in OBJECT_KINDS:
        raise CorruptObjectError(f"Object {sha1} has unknown kind {kind!r}")

    content = data[null_byte_index + 1:]
    if len(content) != size:
        raise CorruptObjectError(
            f"Object {sha1} declares {size} bytes but holds {len(content)}"
        )

    return Object(kind, size, content, sha1.lower())


def read_object(repo_root, sha1, expected_kind=None): # Loads an object and returns its content, checking its kind when asked
    obj = load_object(repo_root, sha1)
    if expected_kind and obj.kind != expected_kind:
        raise CorruptObjectError(f"Object {sha1} is a {obj.kind}, not a {expected_kind}")
    return obj.content
