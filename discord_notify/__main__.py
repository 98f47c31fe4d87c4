import sys

from discord_notify.dependencies import check_dependencies
from discord_notify.errors import DependencyError

PROG = "discord-notify"


def main(argv=None) -> int:
    # Check before importing anything that needs requests or PyYAML
    try:
        check_dependencies()
    except DependencyError as e:
        print(f"{PROG} - {e.message}", file=sys.stderr)
        return e.exit_code

    from discord_notify.cli import main as cli_main
    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main())
