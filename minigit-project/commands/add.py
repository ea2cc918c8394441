# The command: minigit add <file>...
# What it does: Takes a snapshot of files from the working directory and stages them for the next commit by updating the index
# How it does: For each file it stores the content as a blob object (identical content is stored once) and upserts the file's path, blob hash, mode, size and mtime into the index
# What data structure it uses: Hash Table / Dictionary (the index), List (to hold the list of files to add), and performs a Tree Traversal (when expanding directories using os.walk)

import os
import stat
import sys
from utils import repository, objects, ignore, index as index_utils
from utils.errors import MinigitError, NotFoundError, InvalidInputError, IOFailureError
from utils.tree import FILE_MODE, EXECUTABLE_MODE


def run(args):
    try:
        repo_root = repository.require_repo_root()
    except NotFoundError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        files_to_add = _expand_files(args.files, repo_root)
        for file_path in files_to_add:
            stage_file(repo_root, file_path)
    except MinigitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


def to_repo_path(repo_root, file_path): # Absolute or cwd-relative path -> '/'-separated repository-relative path
    rel_path = os.path.relpath(os.path.abspath(file_path), repo_root)
    if rel_path in (os.curdir, os.pardir) or rel_path.startswith(os.pardir + os.sep):
        raise InvalidInputError(f"'{file_path}' is outside repository at '{repo_root}'")
    rel_path = rel_path.replace(os.sep, '/')
    if rel_path.split('/')[0] == repository.MINIGIT_DIR:
        raise InvalidInputError(f"'{file_path}' is inside repository metadata directory '{repository.MINIGIT_DIR}'")
    return rel_path


def file_mode(st_mode):
    return EXECUTABLE_MODE if st_mode & stat.S_IXUSR else FILE_MODE


def stage_file(repo_root, file_path): # Stores one file as a blob, records it in the index and returns the IndexEntry
    rel_path = to_repo_path(repo_root, file_path)
    try:
        with open(file_path, 'rb') as f:
            content = f.read()
        stats = os.stat(file_path)
    except FileNotFoundError:
        raise NotFoundError(f"pathspec '{file_path}' did not match any files")
    except OSError as e:
        raise IOFailureError(f"failed to read file {file_path}: {e}") from e

    hash_val = objects.store_object(repo_root, objects.BLOB, content)
    return index_utils.update_index_entry(
        repo_root, rel_path, hash_val, file_mode(stats.st_mode), stats.st_size, stats.st_mtime_ns
    )


def _expand_files(file_args, repo_root):
    """
    Expands file arguments into a list of files. Directories (including '.')
    are walked, skipping anything matched by .minigitignore.
    """
    ignore_patterns = ignore.get_ignored_patterns(repo_root)
    expanded_files = []
    for arg in file_args:
        path = os.path.abspath(arg)
        if os.path.isdir(path):
            if path != repo_root:
                to_repo_path(repo_root, path)
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(
                    d for d in dirs
                    if d != repository.MINIGIT_DIR
                    and not ignore.is_ignored(to_repo_path(repo_root, os.path.join(root, d)), ignore_patterns)
                )
                for file in sorted(files):
                    full_path = os.path.join(root, file)
                    if not ignore.is_ignored(to_repo_path(repo_root, full_path), ignore_patterns):
                        expanded_files.append(full_path)
        elif os.path.isfile(path):
            expanded_files.append(path)
        else:
            raise NotFoundError(f"pathspec '{arg}' did not match any files")
    return expanded_files
