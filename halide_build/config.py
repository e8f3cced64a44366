"""Defaults and environment lookups for halide-build."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_REPO = "https://github.com/halide/Halide"
DEFAULT_BRANCH = "main"
DEFAULT_MAKE = "make"
DEFAULT_CXX = "c++"
DEFAULT_TERMINFO = "-lncurses"

# Linked into every kernel after -lHalide; terminfo is inserted between
# -lpthread and -ldl.
HALIDE_LIBS = ("-lHalide", "-lpng", "-ljpeg", "-lpthread")
SYSTEM_LIBS = ("-ldl", "-lz")


def env(name: str, default: str | None = None) -> str:
    """Look up an environment variable, falling back to default.

    A variable with no default is required: ValueError names it so the
    CLI can report what to set.
    """
    if name in os.environ:
        return os.environ[name]
    if default is None:
        raise ValueError(f"{name} is not set")
    return default


def default_halide_path() -> Path:
    """Halide checkout location: $HALIDE_PATH, else $HOME/halide."""
    if "HALIDE_PATH" in os.environ:
        return Path(os.environ["HALIDE_PATH"])
    return Path(env("HOME")) / "halide"


def default_cxx() -> str:
    return env("CXX", DEFAULT_CXX)


def terminfo_flag() -> str:
    """Linker flag for the terminfo library.

    $TERMINFO usually names a terminfo database directory, so it only
    replaces the default when it holds a linker flag.
    """
    val = os.environ.get("TERMINFO", "")
    if val.startswith("-"):
        return val
    return DEFAULT_TERMINFO
