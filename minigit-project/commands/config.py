# The command: minigit config <key> <value>
# What it does: A user-facing command to set a configuration key-value pair (e.g., user.name)
# How it does: It passes the key and value to `write_config` in `utils/config.py`, which handles the locking, parsing and file I/O

import sys
from utils import config as config_utils
from utils.errors import MinigitError


def run(args):
    try: # Set the configuration key-value pair
        config_utils.write_config(args.key, args.value)
        print(f"Set {args.key} to '{args.value}'")
    except MinigitError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
