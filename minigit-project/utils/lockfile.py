# What it does: Guards read-modify-write sequences on the index and refs and makes their rewrites atomic
# How it does: Creates `<file>.lock` exclusively (O_CREAT | O_EXCL). New content is written into the lock file and renamed over the target with os.replace, so readers see either the old or the new file, never a partial one
# What data structure it uses: None, it is a thin wrapper over a file handle

import os
from .errors import IOFailureError


class LockFile:
    """
    Exclusive lock on a single file, used as a context manager.

    Content passed to write() replaces the target only when the block exits
    without an exception. If nothing was written the target is left untouched.
    """

    def __init__(self, path):
        self.file_path = path
        self.lock_path = path + '.lock'
        self._fd = None
        self._written = False

    def acquire(self):
        os.makedirs(os.path.dirname(self.lock_path), exist_ok=True)
        try:
            self._fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            raise IOFailureError(
                f"Unable to create '{self.lock_path}': File exists. "
                "Another minigit process seems to be running in this repository."
            )
        except OSError as e:
            raise IOFailureError(f"Unable to create '{self.lock_path}': {e}") from e
        return self

    def write(self, data):
        if self._fd is None:
            raise IOFailureError(f"Lock on {self.file_path} is not held")
        if isinstance(data, str):
            data = data.encode()
        try:
            os.ftruncate(self._fd, 0)
            os.lseek(self._fd, 0, os.SEEK_SET)
            view = memoryview(data)
            while view:
                written = os.write(self._fd, view)
                view = view[written:]
        except OSError as e:
            raise IOFailureError(f"Failed to write {self.lock_path}: {e}") from e
        self._written = True

    def commit(self):
        os.fsync(self._fd)
        os.close(self._fd)
        self._fd = None
        try:
            os.replace(self.lock_path, self.file_path)
        except OSError as e:
            self._unlink()
            raise IOFailureError(f"Failed to replace {self.file_path}: {e}") from e

    def rollback(self):
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
        self._unlink()

    def _unlink(self):
        try:
            os.remove(self.lock_path)
        except FileNotFoundError:
            pass

    def __enter__(self):
        return self.acquire()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None and self._written:
            self.commit()
        else:
            self.rollback()
        return False
