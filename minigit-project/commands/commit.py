# The command: minigit commit -m "<message>"
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes.
# How it does: It builds a hierarchical Merkle Tree from the flat index to get a single root hash. If that hash equals the tree of the current tip nothing happens. Otherwise it stores a commit whose only parent is the tip, advances the branch (or a detached HEAD) and clears the index
# What data structure it uses: Merkle Tree (to represent the project's file structure), Directed Acyclic Graph (DAG) (as each commit links to its parent, forming the history graph), Hash Table / Dictionary (the underlying object store)

import sys
from utils import repository, commits, config, tree, index as index_utils
from utils.errors import MinigitError, NotFoundError, InvalidInputError
from utils.lockfile import LockFile


def run(args):
    try:
        repo_root = repository.require_repo_root()
        commit_hash = commit_index(repo_root, args.message, config.get_author_identity(repo_root))
    except MinigitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    if commit_hash is None:
        print(repository.get_head_status(repo_root))
        print("nothing to commit, working tree clean")
        return

    current_branch = repository.get_current_branch(repo_root) or 'detached HEAD'
    print(f"[{current_branch} {commit_hash[:7]}] {args.message.splitlines()[0]}")


def commit_index(repo_root, message, author=None):
    """
    Commits the staged files and returns the new commit hash, or None when
    the staged tree is identical to the tip's tree (no object is written and
    no ref moves).

    The index stays locked from the read until it is cleared, so an add
    running at the same time fails instead of being dropped.
    """
    with LockFile(index_utils.get_index_path(repo_root)) as index_lock:
        entries = index_utils.read_index(repo_root)
        if not entries:
            raise InvalidInputError('no changes added to commit (use "minigit add")')

        target_ref = repository.head_target_ref(repo_root)
        with LockFile(repository.ref_path(repo_root, target_ref)) as lock:
            try:
                parent_commit = repository.read_ref(repo_root, target_ref)
            except NotFoundError:
                parent_commit = None

            tree_hash = tree.create_tree_from_index(
                repo_root, {path: (entry.hash, entry.mode) for path, entry in entries.items()}
            )

            if parent_commit and commits.get_commit_tree_hash(repo_root, parent_commit) == tree_hash:
                return None

            parents = [parent_commit] if parent_commit else []
            commit_hash = commits.create_commit(repo_root, tree_hash, parents, author, message)
            lock.write(f"{commit_hash}\n")

        # Cleared through the lock held since the entries were read
        index_lock.write(index_utils.serialize_index({}))
    return commit_hash
