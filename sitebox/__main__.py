"""Entry point for the sitebox CLI."""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

USAGE = """Usage: sitebox <command> [options]

Commands:
  create [site]   Creates a new local site.
  reload          Restarts the serving stack.
  version         Prints the sitebox version.

Options:
  --debug         Verbose logging.
  -h, --help      Show this message.
"""


def _setup_logging(console: Console, debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=debug)],
    )


def main(argv=None):
    """Main entry point."""
    from sitebox.config import Config, ConfigError

    args = list(sys.argv[1:] if argv is None else argv)
    console = Console()

    debug = "--debug" in args or bool(os.environ.get("SITEBOX_DEBUG"))
    args = [a for a in args if a != "--debug"]
    _setup_logging(Console(stderr=True), debug)

    if not args or args[0] in ("-h", "--help", "help"):
        console.print(USAGE, markup=False, highlight=False)
        sys.exit(0 if args else 2)

    command, rest = args[0], args[1:]

    if command == "version":
        from sitebox import __version__
        console.print(f"sitebox {__version__}")
        return

    if command not in ("create", "reload"):
        console.print(f"[bold red]Unknown command:[/bold red] {command}\n")
        console.print(USAGE, markup=False, highlight=False)
        sys.exit(2)

    max_args = 1 if command == "create" else 0
    if len(rest) > max_args:
        console.print(f"[bold red]Too many arguments for {command}:[/bold red] {' '.join(rest)}")
        sys.exit(2)

    # Load config
    try:
        config = Config.load()
    except ConfigError as e:
        console.print(f"\n[bold red]Configuration Error:[/bold red] {e}")
        sys.exit(1)

    if command == "reload":
        sys.exit(_reload(config, console))

    from sitebox.create import ProvisioningError, SystemNotRunningError, create_command
    from sitebox.wizard import SiteExistsError

    try:
        create_command(config, site=rest[0] if rest else None, console=console)
    except (SystemNotRunningError, SiteExistsError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ProvisioningError as e:
        console.print(f"\n[bold red]Provisioning failed:[/bold red] {e}")
        sys.exit(1)


def _reload(config, console: Console) -> int:
    from sitebox.create import SystemNotRunningError, require_system_up
    from sitebox.stack import StackError, StackManager

    stack = StackManager(config)
    try:
        require_system_up(stack)
        stack.reload()
    except (SystemNotRunningError, StackError) as e:
        console.print(f"[red]{e}[/red]")
        return 1
    console.print("[green]✓[/green] Stack reloaded")
    return 0


if __name__ == "__main__":
    main()
