from halide_build.source import Source


def test_defaults(tmp_path):
    s = Source(halide_path=str(tmp_path))
    assert s.repo == "https://github.com/halide/Halide"
    assert s.branch == "main"
    assert s.make == "make"
    assert s.make_flags == []


def test_download(tmp_path, runner):
    dest = tmp_path / "halide"
    s = Source(halide_path=dest, repo="https://example.com/Halide", branch="release/17.x")
    assert s.download() is True
    assert runner.calls[0]["argv"] == ["git", "clone", "-b", "release/17.x", "https://example.com/Halide", str(dest)]
    assert runner.calls[0]["cwd"] is None


def test_update_runs_in_checkout(tmp_path, runner):
    runner.returncodes = [1]
    s = Source(halide_path=tmp_path)
    assert s.update() is False
    assert runner.calls[0]["argv"] == ["git", "pull", "origin", "main"]
    assert runner.calls[0]["cwd"] == tmp_path


def test_build_uses_make_flags(tmp_path, runner):
    s = Source(halide_path=tmp_path, make="gmake", make_flags=["-j8", "distrib"])
    assert s.build() is True
    assert runner.calls[0]["argv"] == ["gmake", "-j8", "distrib"]
    assert runner.calls[0]["cwd"] == tmp_path


def test_exists(tmp_path):
    assert Source(halide_path=tmp_path).exists
    assert not Source(halide_path=tmp_path / "missing").exists
