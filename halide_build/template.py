"""Skeleton source for new Halide generators."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import jinja2

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_CXX_KEYWORDS = frozenset("""
    alignas alignof and and_eq asm auto bitand bitor bool break case catch char
    char16_t char32_t class compl const constexpr const_cast continue decltype
    default delete do double dynamic_cast else enum explicit export extern false
    float for friend goto if inline int long mutable namespace new noexcept not
    not_eq nullptr operator or or_eq private protected public register
    reinterpret_cast return short signed sizeof static static_assert static_cast
    struct switch template this thread_local throw true try typedef typeid
    typename union unsigned using virtual void volatile wchar_t while xor xor_eq
""".split())


GENERATOR_TEMPLATE = """\
#include <Halide.h>
using namespace Halide;

class {{ class_name }}: public Generator<{{ class_name }}> {
public:
    Var x, y, c;
    Input<Buffer<float>> input{"input", 3};
    Output<Buffer<float>> output{"output", 3};
    void generate(){

    }

    void schedule(){

    }
};

HALIDE_REGISTER_GENERATOR({{ class_name }}, {{ generator_name }});
"""

_env = jinja2.Environment(undefined=jinja2.StrictUndefined, keep_trailing_newline=True)


def render_generator(class_name: str = "Filter", generator_name: str | None = None) -> str:
    """Render a generator class with empty generate() and schedule().

    The registered generator name defaults to the lower-cased class name.
    """
    if not _IDENTIFIER.fullmatch(class_name) or class_name in _CXX_KEYWORDS:
        raise ValueError(f"Invalid C++ class name: {class_name!r}")
    return _env.from_string(GENERATOR_TEMPLATE).render(
        class_name=class_name,
        generator_name=generator_name or class_name.lower(),
    )


def write_generator(
    path: str | os.PathLike[str],
    class_name: str = "Filter",
    generator_name: str | None = None,
    force: bool = False,
) -> Path:
    """Write a new generator skeleton to path.

    Raises FileExistsError if path exists and force is not set.
    """
    dest = Path(path)
    content = render_generator(class_name, generator_name)
    mode = "w" if force else "x"
    with open(dest, mode) as f:
        f.write(content)
    logger.debug("Wrote %s generator to %s", class_name, dest)
    return dest
