"""Compile and run Halide kernels against a Halide checkout."""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from halide_build import process
from halide_build.config import HALIDE_LIBS, SYSTEM_LIBS, default_cxx, terminfo_flag
from halide_build.link import link_flags

logger = logging.getLogger(__name__)


@dataclass
class Build:
    """Everything needed to compile a set of kernel sources into one executable.

    The Halide headers and libraries are taken from halide_path, which is
    expected to be a checkout built by Source.build().
    """

    halide_path: Path
    output: Path
    src: list[Path] = field(default_factory=list)
    cxx: str | None = None
    cxxflags: str | None = None
    ldflags: str | None = None

    # Extra arguments to the compiler and to the built executable
    build_args: list[str] = field(default_factory=list)
    run_args: list[str] = field(default_factory=list)

    # Prebuilt libraries linked after Halide's own
    libraries: list[Path] = field(default_factory=list)

    keep: bool = False
    generator: bool = False

    def __post_init__(self) -> None:
        self.halide_path = Path(self.halide_path)
        self.output = Path(self.output)
        self.src = [Path(s) for s in self.src]
        self.libraries = [Path(lib) for lib in self.libraries]

    @property
    def include_dir(self) -> Path:
        return self.halide_path / "include"

    @property
    def tools_dir(self) -> Path:
        return self.halide_path / "tools"

    @property
    def lib_dir(self) -> Path:
        return self.halide_path / "lib"

    def compiler(self) -> str:
        return self.cxx or default_cxx()

    def build_command(self) -> list[str]:
        """Compiler invocation that turns src into output."""
        cmd = [
            self.compiler(),
            "-std=c++11",
            "-I", str(self.include_dir),
            "-I", str(self.tools_dir),
        ]
        if self.cxxflags:
            cmd.extend(shlex.split(self.cxxflags))
        if self.generator:
            cmd.append(str(self.tools_dir / "GenGen.cpp"))
        cmd.extend(self.build_args)
        cmd.extend(str(s) for s in self.src)
        cmd.extend(["-o", str(self.output)])
        cmd.extend(["-L", str(self.lib_dir), *HALIDE_LIBS, terminfo_flag(), *SYSTEM_LIBS])
        for lib in self.libraries:
            cmd.extend(link_flags(lib))
        if self.ldflags:
            cmd.extend(shlex.split(self.ldflags))
        return cmd

    def build(self) -> bool:
        """Compile the sources. Returns True if the compiler succeeded."""
        return process.run(self.build_command())

    def run_command(self) -> list[str]:
        # Absolute so a bare file name is not looked up on PATH.
        return [str(self.output.absolute()), *self.run_args]

    def run_env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["LD_LIBRARY_PATH"] = str(self.lib_dir)
        return env

    def run(self) -> bool:
        """Execute the compiled output.

        Returns False without running anything if the output was never
        built. The output is deleted afterwards unless keep is set, even
        when execution fails.
        """
        if not self.output.exists():
            logger.debug("%s does not exist, nothing to run", self.output)
            return False

        try:
            return process.run(self.run_command(), env=self.run_env())
        finally:
            if not self.keep:
                self.output.unlink(missing_ok=True)


def compile_shared_library(compiler: str | None, output: str | os.PathLike[str], args: list[str]) -> bool:
    """Compile args into a shared library at output."""
    cmd = [compiler or default_cxx(), "-std=c++11", "-shared", "-o", str(output), *args]
    return process.run(cmd)


def shared_library_path(path: str | os.PathLike[str]) -> Path:
    """Map a source file to the shared library built from it.

    >>> shared_library_path("gen/filter.cpp")
    PosixPath('gen/libfilter.so')
    """
    p = Path(path)
    return p.with_name(f"lib{p.name}").with_suffix(".so")
