"""Ripple CLI — ripple render.

Entry point for the ``ripple`` command-line interface.  ``ripple render``
runs the synchronous path against a template directory and writes the
encoded updates to stdout, which makes templates easy to check by hand::

    ripple render templates/ --op "append:todos=fragments :: todo" \\
        --op "replace:foot@index" --op remove:todo-3 --bindings '{"todo": {"title": "x"}}'

"""

from __future__ import annotations

import argparse
import json
import sys

from ripple._errors import RippleError
from ripple.updates.actions import Action
from ripple.updates.update_set import UpdateSet


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ripple CLI."""
    parser = argparse.ArgumentParser(
        prog="ripple",
        description="Render partial page updates and push them to live clients.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ripple render
    render_parser = subparsers.add_parser(
        "render",
        help="Render update operations to stdout",
    )
    render_parser.add_argument("templates", nargs="?", default="templates", help="Template directory")
    render_parser.add_argument(
        "--op",
        dest="ops",
        action="append",
        default=[],
        metavar="ACTION:TARGET[=FRAGMENT|@TEMPLATE]",
        help="Update operation (repeatable, rendered in order)",
    )
    render_parser.add_argument(
        "--format", dest="wire_format", default="envelope", help="Wire format (envelope or oob)",
    )
    render_parser.add_argument("--bindings", default="{}", help="Template variables as a JSON object")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from ripple import __version__

    return __version__


_BUILDERS = {
    Action.APPEND: UpdateSet.append,
    Action.PREPEND: UpdateSet.prepend,
    Action.REPLACE: UpdateSet.replace,
    Action.UPDATE: UpdateSet.update,
}


def parse_op(spec: str, updates: UpdateSet) -> UpdateSet:
    """Append the operation described by *spec* to *updates*.

    ``remove:TARGET`` removes; ``ACTION:TARGET=FRAGMENT`` renders a fragment
    identifier verbatim; ``ACTION:TARGET@TEMPLATE`` renders the region named
    like the target inside TEMPLATE.
    """
    verb, sep, rest = spec.partition(":")
    if not sep:
        msg = f"Invalid operation {spec!r}, expected ACTION:TARGET"
        raise argparse.ArgumentTypeError(msg)
    try:
        action = Action(verb.strip().lower())
    except ValueError:
        msg = f"Unknown action {verb!r} in {spec!r}"
        raise argparse.ArgumentTypeError(msg) from None

    if action is Action.REMOVE:
        return updates.remove(rest.strip())

    target, eq, fragment = rest.partition("=")
    if eq:
        return _BUILDERS[action](updates, target.strip()).with_(fragment.strip())
    target, at, template = rest.partition("@")
    if at:
        return _BUILDERS[action](updates, target.strip()).within_template(template.strip())
    msg = f"Operation {spec!r} needs =FRAGMENT or @TEMPLATE"
    raise argparse.ArgumentTypeError(msg)


def _render(args: argparse.Namespace) -> int:
    from kida import TemplateError

    from ripple.rendering.renderer import ResponseRenderer
    from ripple.rendering.resolver import KidaFragmentResolver

    try:
        bindings = json.loads(args.bindings)
    except json.JSONDecodeError as exc:
        print(f"  Invalid --bindings: {exc}", file=sys.stderr)
        return 2
    if not isinstance(bindings, dict):
        print("  --bindings must be a JSON object", file=sys.stderr)
        return 2

    try:
        updates = UpdateSet()
        for spec in args.ops:
            updates = parse_op(spec, updates)
        renderer = ResponseRenderer(
            KidaFragmentResolver.from_directory(args.templates), args.wire_format,
        )
        renderer.render(updates, bindings, sys.stdout)
    except (argparse.ArgumentTypeError, RippleError, TemplateError) as exc:
        sys.stdout.flush()
        print(f"\n  Error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        sys.exit(_render(args))


if __name__ == "__main__":
    main()
