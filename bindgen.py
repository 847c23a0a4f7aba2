import argparse
import logging
import os
import sys
from pathlib import Path

from gosym.config import PackageEntry, load_config, init_suffix_for
from gosym.errors import ConfigError, GenerationError
from gosym.filters import list_go_files
from gosym.generator import Generator
from gosym.renderers import renderer_registry
from gosym.strategy import strategy_registry

logger = logging.getLogger("bindgen")


def _generator(args: argparse.Namespace, config) -> Generator:
    excluded = list(config.exclude_symbols) + list(getattr(args, "exclude", None) or [])
    return Generator.from_config(
        config,
        excluded_symbols=excluded,
        strategy=getattr(args, "strategy", None),
        renderer=args.format,
    )


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate the registration code for one package and print it.

    Nothing is printed when the package exports nothing.  The package
    directory defaults to the import path, relative to ``ROOT``.
    """
    directory = args.dir or args.path
    if not os.path.isdir(os.path.join(args.root, directory)):
        sys.exit(f"Error: Directory not found: {os.path.join(args.root, directory)}")

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    generator = _generator(args, config)
    init = args.init if args.init is not None else init_suffix_for(args.path)
    try:
        output = generator.generate(args.root, args.path, directory, init)
    except GenerationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    if output:
        sys.stdout.write(output)
    return 0


def discover_packages(root: str) -> list:
    """Return a :class:`PackageEntry` for every directory under ``root``
    holding parseable Go files.

    Like the go tool, ``testdata``, ``vendor`` and directories starting
    with ``.`` or ``_`` are not descended into.
    """
    entries = []
    for current, dirs, _files in os.walk(root):
        dirs[:] = sorted(
            d for d in dirs
            if d not in ("testdata", "vendor") and not d.startswith((".", "_"))
        )
        if current == root or not list_go_files(current):
            continue
        rel = os.path.relpath(current, root).replace(os.sep, "/")
        entries.append(PackageEntry(path=rel))
    return entries


def output_filename(path: str, extension: str) -> str:
    """File name written by ``walk`` for the package at import ``path``."""
    return path.replace("/", "_") + extension


def cmd_walk(args: argparse.Namespace) -> int:
    """Generate one file per package under ``ROOT``.

    Packages come from the ``packages`` list of the config file, or are
    discovered by scanning ``ROOT``.  Skipped packages produce no file.
    """
    if not os.path.isdir(args.root):
        sys.exit(f"Error: Directory not found: {args.root}")

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    out_dir = Path(args.out) if args.out else config.output.directory
    if out_dir is None:
        sys.exit("Error: No output directory. Pass --out or set output.directory.")
    out_dir.mkdir(parents=True, exist_ok=True)

    generator = _generator(args, config)
    go_package = args.package or config.output.package
    packages = config.packages or discover_packages(args.root)

    targets = {}
    for entry in packages:
        name = output_filename(entry.path, generator.renderer.extension)
        if name in targets:
            print(
                f"Error: {targets[name]} and {entry.path} would both be written to {name}",
                file=sys.stderr,
            )
            return 2
        targets[name] = entry.path

    failures = 0
    for entry in packages:
        try:
            document = generator.build(args.root, entry.path, entry.directory, entry.init_suffix)
        except GenerationError as exc:
            if not args.keep_going:
                print(f"Error: {exc}", file=sys.stderr)
                return 2
            logger.error("Skipping %s: %s", entry.path, exc)
            failures += 1
            continue
        if document is None:
            logger.debug("Nothing to export from %s", entry.path)
            continue
        target = out_dir / output_filename(entry.path, generator.renderer.extension)
        target.write_text(generator.renderer.render_file(document, go_package), encoding="utf-8")
        logger.info("Wrote %s", target)

    return 2 if failures else 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindgen.py",
        description="Generate interpreter registration code for Go packages.",
    )

    # Global options
    parser.add_argument(
        "--format",
        choices=renderer_registry.keys(),
        default=None,
        help="Output format (default: from config, else go).",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Path to .bindgen.yml or its directory (default: current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )

    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--strategy",
        choices=strategy_registry.keys(),
        default=None,
        help="Package selection strategy (default: from config, else strict).",
    )
    common.add_argument(
        "--exclude",
        metavar="NAME",
        action="append",
        help="Constant or variable name to leave out (repeatable).",
    )

    # generate subcommand
    generate = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate registration code for one package.",
    )
    generate.add_argument("root", metavar="ROOT", help="Source root directory.")
    generate.add_argument("path", metavar="PATH", help="Import path of the package (registry key).")
    generate.add_argument("--dir", help="Package directory relative to ROOT (default: PATH).")
    generate.add_argument("--init", help="Init function suffix (default: CamelCase of PATH).")
    generate.set_defaults(func=cmd_generate)

    # walk subcommand
    walk = subparsers.add_parser(
        "walk",
        parents=[common],
        help="Generate files for every package under a root.",
    )
    walk.add_argument("root", metavar="ROOT", help="Source root directory.")
    walk.add_argument("--out", help="Output directory (default: output.directory from config).")
    walk.add_argument("--package", help="Go package clause of written files (default: packages).")
    walk.add_argument(
        "--keep-going",
        action="store_true",
        help="Log packages that fail to generate and continue.",
    )
    walk.set_defaults(func=cmd_walk)

    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
