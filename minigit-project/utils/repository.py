# What it does: Provides high-level functions for interacting with the repository structure, like finding the repo root and managing branch pointers
# How it does: It reads/writes to files like `HEAD` and those in `refs/heads` to manage the repository's current state and branch locations. `find_repo_root` walks up the directory tree to locate the `.minigit` directory. Every ref write goes through a lock file and an atomic rename
# What data structure it uses: Uses recursion (specifically, linear recursion) to find the repo root. Conceptually, it manages pointers (the `HEAD` file and branch files), which are fundamental components of data structures like Graphs and Linked Lists

import os

from .errors import NotFoundError, InvalidInputError, IOFailureError
from .lockfile import LockFile
from .objects import validate_digest

MINIGIT_DIR = '.minigit'
DEFAULT_BRANCH = 'main'
HEADS_PREFIX = 'refs/heads/'
SYMREF_PREFIX = 'ref: '


def find_repo_root(path='.'): # Recursively searches for the .minigit directory to find the repository root
    path = os.path.abspath(path)
    if os.path.isdir(os.path.join(path, MINIGIT_DIR)):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path)


def require_repo_root(path='.'):
    repo_root = find_repo_root(path)
    if not repo_root:
        raise NotFoundError("not a minigit repository (or any of the parent directories): .minigit")
    return repo_root


def init_repository(path): # Creates the .minigit layout; returns False when it already existed
    minigit_dir = os.path.join(os.path.abspath(path), MINIGIT_DIR)
    if os.path.isdir(minigit_dir):
        return False
    try:
        os.makedirs(os.path.join(minigit_dir, 'objects'), exist_ok=True)
        os.makedirs(os.path.join(minigit_dir, 'refs', 'heads'), exist_ok=True)
    except OSError as e:
        raise IOFailureError(f"Failed to create {minigit_dir}: {e}") from e
    set_head(os.path.dirname(minigit_dir), HEADS_PREFIX + DEFAULT_BRANCH)
    return True


def ref_path(repo_root, ref): # 'HEAD' or 'refs/heads/<name>' -> path on disk
    return os.path.join(repo_root, MINIGIT_DIR, *ref.split('/'))


def validate_branch_name(name):
    if (not name or name.startswith(('.', '-')) or name.endswith(('/', '.lock'))
            or '..' in name or '//' in name or any(c in name for c in ' ~^:?*[\\\0\n')):
        raise InvalidInputError(f"'{name}' is not a valid branch name")
    return name


def read_ref(repo_root, ref): # Returns the stripped content of a ref file
    try:
        with open(ref_path(repo_root, ref), 'r') as f:
            content = f.read().strip()
    except FileNotFoundError:
        raise NotFoundError(f"ref not found: {ref}")
    except OSError as e:
        raise IOFailureError(f"Failed to read {ref}: {e}") from e
    if not content:
        raise NotFoundError(f"ref not found: {ref}")
    return content


def write_ref(repo_root, ref, value):
    with LockFile(ref_path(repo_root, ref)) as lock:
        lock.write(f"{value}\n")


def get_head(repo_root): # Raw HEAD: either 'ref: refs/heads/<name>' or a commit hash
    return read_ref(repo_root, 'HEAD')


def set_head(repo_root, ref): # A 'refs/...' name makes HEAD symbolic, anything else detaches it at that commit
    if ref.startswith('refs/'):
        if ref.startswith(HEADS_PREFIX):
            validate_branch_name(ref[len(HEADS_PREFIX):])
        write_ref(repo_root, 'HEAD', SYMREF_PREFIX + ref)
    else:
        write_ref(repo_root, 'HEAD', validate_digest(ref))


def is_symbolic(head):
    return head.startswith(SYMREF_PREFIX)


def get_branch(repo_root, branch_name): # Retrieves the commit hash that a given branch points to
    validate_branch_name(branch_name)
    return read_ref(repo_root, HEADS_PREFIX + branch_name)


def set_branch(repo_root, branch_name, commit_hash):
    validate_branch_name(branch_name)
    write_ref(repo_root, HEADS_PREFIX + branch_name, validate_digest(commit_hash))


def get_current_branch(repo_root): # Retrieves the name of the current branch HEAD points to, or None if in detached HEAD state
    head = get_head(repo_root)
    if head.startswith(SYMREF_PREFIX + HEADS_PREFIX):
        return head[len(SYMREF_PREFIX + HEADS_PREFIX):]
    return None


def head_target_ref(repo_root): # The ref a new commit advances: the current branch, or HEAD itself when detached
    head = get_head(repo_root)
    if is_symbolic(head):
        return head[len(SYMREF_PREFIX):]
    return 'HEAD'


def get_head_commit(repo_root): # Retrieves the commit hash that HEAD points to, or None if there are no commits
    head = get_head(repo_root)
    if not is_symbolic(head):
        return head
    try:
        return read_ref(repo_root, head[len(SYMREF_PREFIX):])
    except NotFoundError:
        return None


def get_all_branches(repo_root): # Lists all branch names by reading the refs/heads directory
    branches_dir = os.path.join(repo_root, MINIGIT_DIR, 'refs', 'heads')
    branches = []
    for root, _, files in os.walk(branches_dir):
        for name in files:
            if name.endswith('.lock'):
                continue
            rel = os.path.relpath(os.path.join(root, name), branches_dir)
            branches.append(rel.replace(os.sep, '/'))
    return sorted(branches)


def create_branch(repo_root, branch_name, commit_hash): # Creates a new branch pointing to the given commit hash
    if not commit_hash:
        raise NotFoundError("Not a valid object name: 'HEAD'. Cannot create branch.")
    validate_branch_name(branch_name)
    commit_hash = validate_digest(commit_hash)
    branch_path = ref_path(repo_root, HEADS_PREFIX + branch_name)
    with LockFile(branch_path) as lock:
        if os.path.exists(branch_path):
            raise InvalidInputError(f"A branch named '{branch_name}' already exists.")
        lock.write(f"{commit_hash}\n")


def get_head_status(repo_root): # Returns a user-friendly string describing HEAD state
    current_branch = get_current_branch(repo_root)
    if current_branch:
        return f"On branch {current_branch}"
    return f"HEAD detached at {get_head(repo_root)[:7]}"
