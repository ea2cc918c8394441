# What it does: Compares repository states for the status reporter
# What data structure it uses: Dictionary (for states), Set (for efficient O(N) path comparisons)


def compare_states(state1, state2): # Compares two states represented as {path: hash} dictionaries

    paths1 = set(state1.keys())
    paths2 = set(state2.keys())

    added = sorted(paths2 - paths1)
    deleted = sorted(paths1 - paths2)

    modified = []
    for path in sorted(paths1 & paths2):
        if state1[path] != state2[path]:
            modified.append(path)

    return {'added': added, 'deleted': deleted, 'modified': modified}
