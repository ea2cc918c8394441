# The command: minigit log
# What it does: Displays the commit history by starting at the current HEAD and walking backward through the parent links
# How it does: It reads the commit HEAD points to, prints it, and follows its parent until it reaches the root commit
# What data structure it uses: It performs a linear traversal up the parent chain of the Directed Acyclic Graph (DAG) formed by the commits

import sys
import time
from utils import repository, commits
from utils.errors import MinigitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        commit_hash = repository.get_head_commit(repo_root)
        if not commit_hash: # Check if there are any commits
            current_branch = repository.get_current_branch(repo_root) or repository.DEFAULT_BRANCH
            print(f"fatal: your current branch '{current_branch}' does not have any commits yet", file=sys.stderr)
            sys.exit(1)

        for current_hash, commit in commits.iter_history(repo_root, commit_hash):
            print(f"commit {current_hash}")
            print(f"Author: {commit.author}")
            print(f"Date:   {format_date(commit.timestamp, commit.timezone)}")
            print()
            for line in commit.message.splitlines():
                print(f"    {line}")
            print()
    except MinigitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


def format_date(timestamp, timezone):
    return f"{time.strftime('%a %b %d %H:%M:%S %Y', time.localtime(timestamp))} {timezone}"
