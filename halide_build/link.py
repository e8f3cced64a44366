"""Linker flags for prebuilt libraries given by filename."""

from __future__ import annotations

import re
from os import PathLike
from pathlib import Path

# libfoo.a, libfoo.so, libfoo.so.1.2, libfoo.dylib
_LIB_SUFFIX = re.compile(r"\.(a|dylib|so(\.\d+)*)$")


def library_name(filename: str | PathLike[str]) -> str:
    """Return the name to pass to -l for a library file.

    >>> library_name("/opt/halide/lib/libHalide.so")
    'Halide'
    """
    name = Path(filename).name
    if not name:
        raise ValueError(f"Invalid library filename: {filename!r}")
    if name.startswith("lib"):
        name = name[3:]
    name = _LIB_SUFFIX.sub("", name)
    if not name:
        raise ValueError(f"Invalid library filename: {filename!r}")
    return name


def link_flags(filename: str | PathLike[str]) -> list[str]:
    """Return the -L/-l flags needed to link against a library file."""
    path = Path(filename)
    flags: list[str] = []
    if path.parent != Path("."):
        flags.extend(["-L", str(path.parent)])
    flags.append(f"-l{library_name(path)}")
    return flags
