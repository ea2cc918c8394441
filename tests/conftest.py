# Shared pytest fixtures for MiniGit tests

import pytest
import os
import sys
import shutil
import tempfile

# Add minigit-project to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'minigit-project'))

from commands import add, commit
from utils import repository


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized MiniGit repository in a temporary directory
    original_dir = os.getcwd()
    os.chdir(temp_dir)

    repository.init_repository(temp_dir)

    # Set up config
    config_path = os.path.join(temp_dir, '.minigit', 'config')
    with open(config_path, 'w') as f:
        f.write('[user]\n')
        f.write('name = Test User\n')
        f.write('email = test@example.com\n')

    yield temp_dir

    os.chdir(original_dir)


@pytest.fixture
def repo_with_file(temp_repo):
    # Creates a repo with a single file (not committed)
    write_file(temp_repo, 'test.txt', 'Hello, World!')
    return temp_repo


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file
    write_file(temp_repo, 'README.md', '# Test Project\n')
    add.stage_file(temp_repo, os.path.join(temp_repo, 'README.md'))
    commit_hash = commit.commit_index(temp_repo, 'Initial commit', 'Test User <test@example.com>')
    return temp_repo, commit_hash


def write_file(repo_root, rel_path, content):
    # Writes `content` to `rel_path` under the repo, creating parent directories
    full_path = os.path.join(repo_root, *rel_path.split('/'))
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    mode = 'wb' if isinstance(content, bytes) else 'w'
    with open(full_path, mode) as f:
        f.write(content)
    return full_path


def count_objects(repo_root):
    # Number of object files on disk
    objects_dir = os.path.join(repo_root, '.minigit', 'objects')
    return sum(len(files) for _, _, files in os.walk(objects_dir))


# Mock args object for command functions
class MockArgs:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)
