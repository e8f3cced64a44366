"""halide-build compiles and runs Halide kernels against a local Halide checkout."""

__version__ = "0.1.0"

from halide_build.build import Build, compile_shared_library, shared_library_path
from halide_build.source import Source
from halide_build.link import library_name, link_flags
from halide_build.template import render_generator, write_generator

__all__ = [
    "Build",
    "Source",
    "compile_shared_library",
    "shared_library_path",
    "library_name",
    "link_flags",
    "render_generator",
    "write_generator",
]
