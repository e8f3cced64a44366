"""CLI entry point for halide-build."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from halide_build import __version__
from halide_build.build import Build, compile_shared_library, shared_library_path
from halide_build.config import DEFAULT_BRANCH, DEFAULT_MAKE, DEFAULT_REPO, default_cxx, default_halide_path, env
from halide_build.source import Source
from halide_build.template import write_generator

logger = logging.getLogger(__name__)


def _fail(msg: str, *args: object) -> None:
    logger.error(msg, *args)
    sys.exit(1)


def split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first literal "--".

    Everything after it goes untouched to the child process.
    """
    if "--" in argv:
        i = argv.index("--")
        return argv[:i], argv[i + 1:]
    return argv, []


def setup_logging(quiet: bool = False, verbose: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=level,
    )
    logging.getLogger("halide_build").setLevel(level)


def _halide_path(args: argparse.Namespace) -> Path:
    if args.halide_path is None:
        try:
            args.halide_path = default_halide_path()
        except ValueError as e:
            raise ValueError(f"Cannot find Halide directory ({e}); pass -p or set HALIDE_PATH") from e
    return args.halide_path


def _build_shared(args: argparse.Namespace) -> None:
    if not args.shared:
        return
    dest = shared_library_path(args.shared)
    logger.info("Building shared library: %s -> %s", args.shared, dest)
    if not compile_shared_library(args.cxx, dest, [args.shared]):
        _fail("Unable to compile shared library %s", dest)


def cmd_src(args: argparse.Namespace) -> None:
    """Download or update the Halide source, then build it."""
    source = Source(
        halide_path=_halide_path(args),
        repo=args.url,
        branch=args.branch,
        make=args.make,
        make_flags=args.passthrough,
    )

    if source.exists:
        logger.info("Updating Halide source in %s", source.halide_path)
        if not source.update():
            _fail("Failed to update git repository")
    else:
        logger.info("Downloading Halide source to %s", source.halide_path)
        if not source.download():
            _fail("Failed to clone git repository")

    if not source.build():
        _fail("Halide build failed")
    logger.info("Halide built successfully in %s", source.halide_path)


def _make_build(args: argparse.Namespace, output: Path, keep: bool) -> Build:
    return Build(
        halide_path=_halide_path(args),
        output=output,
        src=[Path(p) for p in args.input],
        cxx=args.cxx,
        cxxflags=args.cxxflags,
        ldflags=args.ldflags,
        libraries=[Path(p) for p in args.link],
        keep=keep,
        generator=args.generator,
    )


def cmd_build(args: argparse.Namespace) -> None:
    """Compile kernel sources into a named executable."""
    build = _make_build(args, Path(args.name), keep=True)
    build.build_args = list(args.passthrough)

    logger.info("Compiling %s to %s", [str(s) for s in build.src], build.output)
    if not build.build():
        _fail("Unable to build %s", build.output)

    _build_shared(args)


def cmd_run(args: argparse.Namespace) -> None:
    """Compile kernel sources to a temporary executable and run it."""
    output = Path(f"./halide-{int(time.time() * 1000)}")
    build = _make_build(args, output, keep=args.keep)
    build.run_args = list(args.passthrough)

    logger.info("Compiling %s to %s", [str(s) for s in build.src], build.output)
    if not build.build():
        _fail("Failure building %s", [str(s) for s in build.src])

    logger.info("Running %s", build.output)
    if not build.run():
        _fail("Failure while running %s", build.output)

    _build_shared(args)


def cmd_new(args: argparse.Namespace) -> None:
    """Write a generator skeleton."""
    dest = write_generator(args.path, class_name=args.name, force=args.force)
    logger.info("Created generator %s in %s", args.name, dest)


def _add_compile_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--cxx", default=default_cxx(), help="Set c++ compiler (default: $CXX or c++)")
    p.add_argument("--cxxflags", default=env("CXXFLAGS", ""),
                   help='Set c++ compile flags (default: $CXXFLAGS). Values starting with - '
                        'need the --cxxflags="-g -O2" form')
    p.add_argument("--ldflags", default=env("LDFLAGS", ""),
                   help='Set c++ link flags (default: $LDFLAGS). Values starting with - '
                        'need the --ldflags="-lfoo -lbar" form')
    p.add_argument("-g", "--generator", action="store_true", help="Link with GenGen.cpp")
    p.add_argument("-l", "--link", action="append", default=[], metavar="LIB",
                   help="Link against a prebuilt library file (repeatable)")
    p.add_argument("--shared", metavar="FILE", help="Also compile FILE into a shared library")


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="halide",
        description="Download and build Halide, then compile and run Halide kernels. "
                    "Arguments after -- are passed to make, the compiler or the kernel.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command that is run")
    parser.add_argument("-p", "--halide-path", type=Path, default=None,
                        help="Path to Halide directory (default: $HALIDE_PATH or ~/halide)")
    sub = parser.add_subparsers(dest="command")

    # halide src
    src_p = sub.add_parser("src", help="Download, build and update Halide source")
    src_p.add_argument("-m", "--make", default=DEFAULT_MAKE, help="Make executable")
    src_p.add_argument("--url", default=DEFAULT_REPO, help="Halide repository")
    src_p.add_argument("--branch", default=DEFAULT_BRANCH, help="Halide source branch")
    src_p.set_defaults(func=cmd_src)

    # halide build
    build_p = sub.add_parser("build", help="Build Halide source files")
    _add_compile_options(build_p)
    build_p.add_argument("name", help="Output executable name")
    build_p.add_argument("input", nargs="+", help="Input files")
    build_p.set_defaults(func=cmd_build)

    # halide run
    run_p = sub.add_parser("run", help="Build and run Halide source files")
    _add_compile_options(run_p)
    run_p.add_argument("-k", "--keep", action="store_true", help="Keep generated executables")
    run_p.add_argument("input", nargs="+", help="Input files")
    run_p.set_defaults(func=cmd_run)

    # halide new
    new_p = sub.add_parser("new", help="Create new Halide generator")
    new_p.add_argument("path", help="Destination file")
    new_p.add_argument("--name", default="Filter", help="Generator class name")
    new_p.add_argument("-f", "--force", action="store_true", help="Overwrite an existing file")
    new_p.set_defaults(func=cmd_new)

    return parser


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    argv, passthrough = split_passthrough(list(argv))

    parser = make_parser()
    args = parser.parse_args(argv)
    args.passthrough = passthrough
    setup_logging(quiet=args.quiet, verbose=args.verbose)

    if args.command is None:
        parser.print_help(sys.stderr)
        return

    try:
        args.func(args)
    except (OSError, ValueError) as e:
        _fail("%s", e)


if __name__ == "__main__":
    main()
