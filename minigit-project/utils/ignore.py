# What it does: Implements the `.minigitignore` functionality for the working-directory scanner
# What data structure it uses: Set (to store the ignore patterns for efficient, near O(1) average time complexity lookups)

import os
from fnmatch import fnmatch

ALWAYS_IGNORED = {'.minigit', '.minigit/*', '.git', '.git/*'}


def get_ignored_patterns(repo_root):
    """
    Reads the .minigitignore file and returns a set of glob patterns.
    """
    ignore_file = os.path.join(repo_root, '.minigitignore')
    patterns = set(ALWAYS_IGNORED)

    if os.path.exists(ignore_file):
        with open(ignore_file, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    patterns.add(line)
    return patterns


def is_ignored(path, ignore_patterns): # Returns True if the '/'-separated path matches any ignore pattern
    parts = path.split('/')
    for pattern in ignore_patterns:
        if fnmatch(path, pattern) or any(fnmatch(part, pattern) for part in parts):
            return True
    return False
