# What it does: Creates, stores and parses commit objects
# How it does: A commit is UTF-8 text following a fixed grammar:
#
#     commit  := header* "\n" message "\n"
#     header  := KEY " " VALUE "\n"
#     KEY     := "tree" | "parent" | "author" | "committer"
#     author  := <name and email> " " <unix-seconds> " " <tz-offset>
#
# `tree` appears once, `parent` once per parent in order, the first empty line ends the headers and everything after it is the message
# What data structure it uses: Directed Acyclic Graph (DAG), each commit points at its parents, and since parents must already exist when a commit is created the graph can never contain a cycle

import time
from collections import namedtuple

from . import objects
from .tree import get_tree_files
from .errors import InvalidInputError, CorruptObjectError

DEFAULT_AUTHOR = "MiniGit User <user@minigit.local>"

Commit = namedtuple('Commit', ['tree', 'parents', 'author', 'committer', 'message', 'timestamp', 'timezone'])


def format_timezone(timestamp): # Local UTC offset at `timestamp`, as +HHMM / -HHMM
    offset = time.localtime(timestamp).tm_gmtoff or 0
    sign = '-' if offset < 0 else '+'
    offset = abs(offset) // 60
    return f"{sign}{offset // 60:02d}{offset % 60:02d}"


def serialize_commit(commit): # Encodes a Commit into its canonical text form
    lines = [f'tree {commit.tree}']
    for parent in commit.parents:
        lines.append(f'parent {parent}')
    lines.append(f'author {commit.author} {commit.timestamp} {commit.timezone}')
    lines.append(f'committer {commit.committer} {commit.timestamp} {commit.timezone}')
    lines.append('')
    lines.append(commit.message)
    return ('\n'.join(lines) + '\n').encode()


def _parse_identity(value): # "Name <email> 1700000000 +0100" -> ("Name <email>", 1700000000, "+0100")
    parts = value.rsplit(None, 2)
    if len(parts) != 3:
        raise CorruptObjectError(f"Malformed identity line: {value!r}")
    identity, timestamp, timezone = parts
    try:
        timestamp = int(timestamp)
    except ValueError as e:
        raise CorruptObjectError(f"Malformed timestamp in identity line: {value!r}") from e
    return identity, timestamp, timezone


def parse_commit(content):
    """
    Parses commit bytes into a Commit.

    Raises CorruptObjectError when the header block never ends, a header line
    is not `KEY VALUE`, or the tree/author/committer headers are missing.
    """
    try:
        text = content.decode()
    except UnicodeDecodeError as e:
        raise CorruptObjectError("Commit is not valid UTF-8") from e

    header, separator, body = text.partition('\n\n')
    if not separator:
        raise CorruptObjectError("Commit has no blank line separating headers from the message")

    tree_hash = None
    parents = []
    author = committer = None
    timestamp = timezone = None

    for line in header.split('\n'):
        key, sep, value = line.partition(' ')
        if not sep:
            raise CorruptObjectError(f"Malformed commit header line: {line!r}")
        if key == 'tree':
            tree_hash = value
        elif key == 'parent':
            parents.append(value)
        elif key == 'author':
            author, _, _ = _parse_identity(value)
        elif key == 'committer':
            committer, timestamp, timezone = _parse_identity(value)

    if not tree_hash or author is None or committer is None:
        raise CorruptObjectError("Commit is missing a tree, author or committer header")

    message = body.strip()
    return Commit(tree_hash, tuple(parents), author, committer, message, timestamp, timezone)


def create_commit(repo_root, tree_hash, parents, author, message): # Builds, stores and returns the hash of a new commit
    if not tree_hash:
        raise InvalidInputError("tree hash cannot be empty")
    if not message or not message.strip():
        raise InvalidInputError("Aborting commit due to empty commit message.")
    if not author:
        author = DEFAULT_AUTHOR
    if "\n" in author:
        raise InvalidInputError("author identity cannot span multiple lines")

    timestamp = int(time.time())
    commit = Commit(
        tree=tree_hash,
        parents=tuple(parents),
        author=author,
        committer=author,
        message=message,
        timestamp=timestamp,
        timezone=format_timezone(timestamp),
    )
    return objects.store_object(repo_root, objects.COMMIT, serialize_commit(commit))


def read_commit(repo_root, commit_hash):
    return parse_commit(objects.read_object(repo_root, commit_hash, objects.COMMIT))


def get_commit_tree_hash(repo_root, commit_hash): # Retrieves the tree hash from a commit object
    return read_commit(repo_root, commit_hash).tree


def get_commit_files(repo_root, commit_hash): #Retrieves all files and their hashes from a commit by reading its tree recursively
    if not commit_hash:
        return {}
    return get_tree_files(repo_root, get_commit_tree_hash(repo_root, commit_hash))


def iter_history(repo_root, commit_hash): # Walks the first-parent chain from `commit_hash` back to the root commit
    while commit_hash:
        commit = read_commit(repo_root, commit_hash)
        yield commit_hash, commit
        commit_hash = commit.parents[0] if commit.parents else None
