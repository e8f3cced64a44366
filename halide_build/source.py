"""Maintain the Halide source checkout: clone, pull and build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from halide_build import process
from halide_build.config import DEFAULT_BRANCH, DEFAULT_MAKE, DEFAULT_REPO


@dataclass
class Source:
    """A Halide git checkout and the make invocation that builds it."""

    halide_path: Path
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    make: str = DEFAULT_MAKE
    make_flags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.halide_path = Path(self.halide_path)

    @property
    def exists(self) -> bool:
        return self.halide_path.exists()

    def download(self) -> bool:
        """Clone the repository for the first time."""
        return process.run(["git", "clone", "-b", self.branch, self.repo, self.halide_path])

    def update(self) -> bool:
        """Pull the configured branch into an existing checkout."""
        return process.run(["git", "pull", "origin", self.branch], cwd=self.halide_path)

    def build(self) -> bool:
        return process.run([self.make, *self.make_flags], cwd=self.halide_path)
