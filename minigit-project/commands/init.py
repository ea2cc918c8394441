# The command: minigit init [<directory>]
# What it does: Initializes a new, empty repository by creating the hidden `.minigit` directory and its internal structure
# How it does: It creates the `objects` and `refs/heads` subdirectories, then writes `HEAD` as a symbolic reference to the default 'main' branch. The branch file itself only appears with the first commit
# What data structure it uses: Tree (the file system directory structure is a tree). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

import os
import sys
from utils import repository
from utils.errors import MinigitError


def run(args):
    target = os.path.abspath(getattr(args, 'directory', None) or os.getcwd())
    repo_path = os.path.join(target, repository.MINIGIT_DIR)

    try:
        os.makedirs(target, exist_ok=True)
        created = repository.init_repository(target)
    except (MinigitError, OSError) as e:
        print(f"Error initializing repository: {e}", file=sys.stderr)
        sys.exit(1)

    if created:
        print(f"Initialized empty MiniGit repository in {repo_path}/")
    else:
        print(f"Reinitialized existing MiniGit repository in {repo_path}/")
