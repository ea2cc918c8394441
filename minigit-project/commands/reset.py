# The command: minigit reset <file>...
# What it does: Unstages files by removing them from the staging area (the index). It is the opposite of `minigit add`
# How it does: Each path is removed from the index under the index lock. Blobs already written stay in the object store
# What data structure it uses: Dictionary (the index)

import sys
from utils import repository, index as index_utils
from utils.errors import MinigitError
from commands.add import to_repo_path


def run(args): #Executes the reset command to unstage files
    try:
        repo_root = repository.require_repo_root()
        removed = unstage(repo_root, args.files)
    except MinigitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    if removed:
        print("Unstaged changes after reset:")
        for path in removed:
            print(f"D\t{path}")


def unstage(repo_root, paths): # Returns the repository paths that were actually staged
    removed = []
    for path in paths:
        rel_path = to_repo_path(repo_root, path)
        if index_utils.remove_index_entry(repo_root, rel_path):
            removed.append(rel_path)
    return removed
