"""CLI interface for scim-ext using Click."""

import logging
import sys
from typing import Optional

import click

from . import __version__
from .codec import decode, decode_file, to_dict
from .errors import SCIMError
from .fields import dump_json
from .resources import RESOURCE_TYPES
from .schemas import prefix_policy


def _colorize(text: str, color: str) -> str:
    """Colorize text using ANSI codes."""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m",
        "bold": "\033[1m",
    }
    if not sys.stdout.isatty():
        return text  # No colors if not a TTY
    return f"{colors.get(color, '')}{text}{colors['reset']}"


def _print_error(message: str, path: str = ""):
    """Print an error with the field or namespace it refers to."""
    loc = f" at {path}" if path else ""
    print(_colorize(f"❌ {message}{loc}", "red"))


def _print_success(message: str):
    print(_colorize(f"✅ {message}", "green"))


def _inspect_and_report(resource, urn_prefix: Optional[str], normalize: bool) -> int:
    """Print what was decoded (or the re-encoded document). Returns exit code."""
    if normalize:
        print(dump_json(to_dict(resource), indent=2, separators=(",", ": ")))
        return 0

    policy = prefix_policy(urn_prefix) if urn_prefix else None
    urns = sorted(resource.get_extension_urns(policy))
    custom = sorted(k for k in resource.additional_properties if k not in urns)

    _print_success(f"Decoded {type(resource).__name__} {resource.id or '(no id)'}")
    print(_colorize(f"\nExtensions ({len(urns)}):", "bold"))
    for urn in urns:
        print(f"  {urn}")
    print(_colorize(f"\nCustom properties ({len(custom)}):", "bold"))
    for name in custom:
        print(f"  {name} = {resource.additional_properties[name]}")
    return 0


@click.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--stdin", is_flag=True, help="Read JSON from stdin")
@click.option(
    "--type", "resource_type",
    type=click.Choice(sorted(RESOURCE_TYPES)), default="resource", show_default=True,
    help="Resource shape to decode into",
)
@click.option("--urn-prefix", default=None, help="Only report extensions whose URN starts with this prefix")
@click.option("--normalize", is_flag=True, help="Print the re-encoded flat JSON document")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
def main(file: Optional[str], stdin: bool, resource_type: str, urn_prefix: Optional[str],
         normalize: bool, verbose: bool):
    """Decode a SCIM 2.0 resource and list its extensions (RFC 7643).

    Examples:

    \b
      scim-ext user.json
      scim-ext --type user --normalize user.json
      cat user.json | scim-ext --stdin --urn-prefix urn:ietf:params:scim:schemas:extension:
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cls = RESOURCE_TYPES[resource_type]
    try:
        if stdin:
            resource = decode(sys.stdin.buffer.read(), cls)
        elif file:
            resource = decode_file(file, cls)
        else:
            click.echo(click.get_current_context().get_help())
            sys.exit(1)
        exit_code = _inspect_and_report(resource, urn_prefix, normalize)
    except SCIMError as e:
        _print_error(e.message, e.path)
        sys.exit(1)
    except OSError as e:
        _print_error(f"Error reading input: {e}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
