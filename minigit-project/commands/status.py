# The command: minigit status
# What it does: Provides a summary of the repository state by comparing the HEAD commit, the index (staging area), and the working directory
# How it does: It generates {path: hash} dictionaries for HEAD (by walking the commit's tree) and for the working directory (hashing without writing), then reports staged paths, unstaged modifications and untracked files
# What data structure it uses: Hash Table / Dictionary (to represent the states for efficient O(1) average time complexity lookups), Sets (for efficient comparison of file lists)

import os
import sys
from utils import repository, objects, commits, ignore, diff as diff_utils, index as index_utils
from utils.errors import MinigitError, IOFailureError


def run(args): # Compares the HEAD, index, and working directory states and prints the status
    try:
        repo_root = repository.require_repo_root()
        print(repository.get_head_status(repo_root))
        report = collect_status(repo_root)
    except MinigitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    if not any(report.values()):
        print("nothing to commit, working tree clean")
        return

    if report['staged']:
        print("\nChanges to be committed:")
        print("  (use \"minigit reset <file>...\" to unstage)")
        for change_type, path in report['staged']:
            print(f"\t{change_type}:   {path}")

    if report['modified'] or report['deleted']:
        print("\nChanges not staged for commit:")
        print("  (use \"minigit add <file>...\" to update what will be committed)")
        for path in report['modified']:
            print(f"\tmodified:   {path}")
        for path in report['deleted']:
            print(f"\tdeleted:    {path}")

    if report['untracked']:
        print("\nUntracked files:")
        print("  (use \"minigit add <file>...\" to include in what will be committed)")
        for path in report['untracked']:
            print(f"\t{path}")


def scan_working_files(repo_root): # {path: blob hash} for every non-ignored file, nothing is written
    working_files = {}
    ignore_patterns = ignore.get_ignored_patterns(repo_root)
    for root, dirs, files in os.walk(repo_root):
        rel_root = os.path.relpath(root, repo_root).replace(os.sep, '/')
        rel_root = '' if rel_root == '.' else rel_root + '/'
        dirs[:] = [d for d in dirs if not ignore.is_ignored(rel_root + d, ignore_patterns)]

        for file in files:
            rel_path = rel_root + file
            if ignore.is_ignored(rel_path, ignore_patterns):
                continue
            try:
                with open(os.path.join(root, file), 'rb') as f:
                    content = f.read()
            except OSError as e:
                raise IOFailureError(f"failed to read file {rel_path}: {e}") from e
            working_files[rel_path] = objects.hash_object(objects.BLOB, content)
    return working_files


def collect_status(repo_root):
    """
    Returns {'staged': [(label, path)], 'modified', 'deleted', 'untracked': [path]}.

    The index only holds what was staged since the last commit, so a file
    that is neither staged nor in the HEAD tree is untracked.
    """
    head_commit = repository.get_head_commit(repo_root)
    head_files = commits.get_commit_files(repo_root, head_commit)
    index_files = index_utils.read_index_hashes(repo_root)
    working_files = scan_working_files(repo_root)

    staged = [('modified' if path in head_files else 'new file', path) for path in sorted(index_files)]

    unstaged_base = dict(head_files)
    unstaged_base.update(index_files)
    changes = diff_utils.compare_states(unstaged_base, working_files)

    return {
        'staged': staged,
        'modified': changes['modified'],
        'deleted': changes['deleted'],
        'untracked': changes['added'],
    }
