"""CLI entrypoints for scrtask commands."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Tuple

from .config import TaskConfig, load_config
from .errors import BuildFailure, ConfigurationError
from .generator import available_generators
from .logging import configure_logging
from .task import DescriptorTask, descriptor_path


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _parse_property(value: str) -> Tuple[str, str]:
    key, sep, item = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{value}'")
    return key.strip(), item


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scrtask",
        description="Generate service component descriptors from annotated sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Scan a source tree and write the component descriptor.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "srcdir",
        nargs="?",
        default=None,
        help="Root directory of the sources to scan.",
    )
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .scrtask.yml file (defaults to the current directory's).",
    )
    generate_parser.add_argument(
        "-d",
        "--destdir",
        default=None,
        help="Directory the descriptor and metatype files are written to.",
    )
    generate_parser.add_argument(
        "-cp",
        "--classpath",
        action="append",
        default=[],
        help=f"Classpath entries, separated by '{os.pathsep}'. May be repeated.",
    )
    generate_parser.add_argument(
        "--final-name",
        default=None,
        help="File name of the generated descriptor.",
    )
    generate_parser.add_argument(
        "--metatype-name",
        default=None,
        help="File name of the generated metatype file.",
    )
    generate_parser.add_argument(
        "--generate-accessors",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate bind/unbind methods (default: on).",
    )
    generate_parser.add_argument(
        "--strict-mode",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on warnings as well as errors (default: off).",
    )
    generate_parser.add_argument(
        "--spec-version",
        default=None,
        help="Target specification version; detected from the annotations when unset.",
    )
    generate_parser.add_argument(
        "--annotation-processor",
        dest="annotation_processors",
        action="append",
        default=[],
        help="Fully-qualified class name of an additional annotation processor.",
    )
    generate_parser.add_argument(
        "--include",
        dest="includes",
        action="append",
        default=[],
        help="Include pattern for source files (Ant syntax).",
    )
    generate_parser.add_argument(
        "--exclude",
        dest="excludes",
        action="append",
        default=[],
        help="Exclude pattern for source files (Ant syntax).",
    )
    generate_parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Do not skip version-control and editor backup files.",
    )
    generate_parser.add_argument(
        "--property",
        dest="properties",
        action="append",
        type=_parse_property,
        default=[],
        metavar="KEY=VALUE",
        help="Free-form property passed to the generator.",
    )
    generate_parser.add_argument(
        "--generator",
        default=None,
        help="Generator to use as 'module:attr' (defaults to the installed one).",
    )

    generators_parser = subparsers.add_parser(
        "generators",
        help="List installed descriptor generators.",
    )
    _add_verbose_option(generators_parser, suppress_default=True)

    return parser


def _apply_arguments(config: TaskConfig, args: argparse.Namespace) -> TaskConfig:
    """Overlay command-line values on the loaded configuration."""
    if args.srcdir is not None:
        config.srcdir = Path(args.srcdir)
    if args.destdir is not None:
        config.destdir = Path(args.destdir)
    for value in args.classpath:
        config.classpath.extend(Path(part) for part in value.split(os.pathsep) if part.strip())
    if args.final_name:
        config.final_name = args.final_name
    if args.metatype_name:
        config.metatype_name = args.metatype_name
    if args.generate_accessors is not None:
        config.generate_accessors = args.generate_accessors
    if args.strict_mode is not None:
        config.strict_mode = args.strict_mode
    if args.spec_version is not None:
        config.spec_version = args.spec_version
    config.annotation_processors.extend(args.annotation_processors)
    config.includes.extend(args.includes)
    config.excludes.extend(args.excludes)
    if args.no_default_excludes:
        config.default_excludes = False
    config.properties.update(dict(args.properties))
    if args.generator:
        config.generator = args.generator
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for scrtask commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "generators":
        names = available_generators()
        if not names:
            print("No descriptor generators installed")
        for name in names:
            print(name)
        return

    try:
        config = load_config(Path(args.config) if args.config else Path.cwd())
        task = DescriptorTask.from_config(_apply_arguments(config, args))
        task.execute()
    except ConfigurationError as exc:
        parser.exit(1, f"scrtask: {exc}\n")
    except BuildFailure as exc:
        parser.exit(1, f"{exc}\nRun with --verbose for more details.\n")
    print(f"Descriptor written to {_relativize(descriptor_path(task))}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
