import argparse
import enum
import sys
from commands import init, add, commit, status, log, branch, reset, config


class Command(enum.Enum):
    INIT = 'init'
    ADD = 'add'
    COMMIT = 'commit'
    STATUS = 'status'
    LOG = 'log'
    BRANCH = 'branch'
    RESET = 'reset'
    CONFIG = 'config'


def build_command_table(): # Command -> handler, built once per process by main()
    return {
        Command.INIT: init.run,
        Command.ADD: add.run,
        Command.COMMIT: commit.run,
        Command.STATUS: status.run,
        Command.LOG: log.run,
        Command.BRANCH: branch.run,
        Command.RESET: reset.run,
        Command.CONFIG: config.run,
    }


def build_parser():
    # The main parser
    parser = argparse.ArgumentParser(prog="minigit", description="MiniGit: a small local version control system.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: init
    init_parser = subparsers.add_parser(Command.INIT.value, help="Initialize a new, empty repository.")
    init_parser.add_argument("directory", nargs="?", help="Directory to initialize (defaults to the current one).")

    # Command: add
    add_parser = subparsers.add_parser(Command.ADD.value, help="Add file contents to the index.")
    add_parser.add_argument("files", nargs="+", help="Files or directories to add.")

    # Command: commit
    commit_parser = subparsers.add_parser(Command.COMMIT.value, help="Record changes to the repository.")
    commit_parser.add_argument("-m", "--message", required=True, help="Commit message.")

    # Command: status
    subparsers.add_parser(Command.STATUS.value, help="Show the working tree status.")

    # Command: log
    subparsers.add_parser(Command.LOG.value, help="Show commit logs.")

    # Command: branch
    branch_parser = subparsers.add_parser(Command.BRANCH.value, help="List or create branches.")
    branch_parser.add_argument("name", nargs="?", help="The name of the branch to create.")

    # Command: reset
    reset_parser = subparsers.add_parser(Command.RESET.value, help="Unstage files.")
    reset_parser.add_argument("files", nargs="+", help="Files to unstage from the index.")

    # Command: config
    config_parser = subparsers.add_parser(Command.CONFIG.value, help="Set user name and email.")
    config_parser.add_argument("key", help="The configuration key (e.g., user.name).")
    config_parser.add_argument("value", help="The configuration value.")

    return parser


def dispatch(command_table, args):
    handler = command_table[Command(args.command)]
    return handler(args)


# The main entry point for the MiniGit version control system
def main(argv=None):
    command_table = build_command_table()
    args = build_parser().parse_args(argv)
    dispatch(command_table, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
