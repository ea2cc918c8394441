# What it does: Defines the typed failures raised by the storage core
# How it does: Every core operation raises one of these instead of printing or exiting; only the commands turn them into messages and exit codes
# What data structure it uses: A small class hierarchy rooted at MinigitError


class MinigitError(Exception):
    """Base class for every failure raised by the minigit core."""


class NotFoundError(MinigitError):
    """A missing object, ref, branch or repository."""


class InvalidInputError(MinigitError, ValueError):
    """Bad caller input: empty tree hash, empty message, empty staging set, malformed path."""


class CorruptObjectError(MinigitError):
    """A stored object whose header, tree or commit encoding cannot be parsed."""


class IOFailureError(MinigitError):
    """Filesystem failure while creating directories or reading/writing files."""
