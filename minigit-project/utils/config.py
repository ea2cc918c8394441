# What it does: Manages all read/write operations for the `.minigit/config` file
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import io
import os

from .errors import NotFoundError, InvalidInputError, IOFailureError
from .lockfile import LockFile
from .repository import find_repo_root, MINIGIT_DIR


def get_config_path(repo_root):  # Returns the path to the config file within the repository
    return os.path.join(repo_root, MINIGIT_DIR, 'config')


def _load(config_path):
    config = configparser.ConfigParser()
    try:
        config.read(config_path)
    except configparser.Error as e:
        raise InvalidInputError(f"Bad config file {config_path}: {e}") from e
    return config


def read_config(repo_root=None): # Reads and returns the configuration as a ConfigParser object
    repo_root = repo_root or find_repo_root()
    if not repo_root:
        return configparser.ConfigParser()
    return _load(get_config_path(repo_root))


def write_config(key, value, repo_root=None): # Sets a configuration key to a value and writes it to the config file
    repo_root = repo_root or find_repo_root()
    if not repo_root:
        raise NotFoundError("Not a minigit repository.")

    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise InvalidInputError("Invalid key format. Should be 'section.key'.")

    config_path = get_config_path(repo_root)
    with LockFile(config_path) as lock:
        config = _load(config_path)
        if not config.has_section(section):
            config.add_section(section)
        config.set(section, option, value)

        buffer = io.StringIO()
        try:
            config.write(buffer)
        except configparser.Error as e:
            raise IOFailureError(f"Failed to write config: {e}") from e
        lock.write(buffer.getvalue())


def get_user_config(repo_root): # Retrieves user.name and user.email from the config, or None if not set
    config = _load(get_config_path(repo_root))
    user_name = config.get('user', 'name', fallback=None)
    user_email = config.get('user', 'email', fallback=None)
    return user_name, user_email


def get_author_identity(repo_root): # "Name <email>" from config, or None so the commit default applies
    user_name, user_email = get_user_config(repo_root)
    if not user_name or not user_email:
        return None
    return f"{user_name} <{user_email}>"
