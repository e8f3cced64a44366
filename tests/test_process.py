import logging

from halide_build import process


def test_run_logs_command_at_debug(tmp_path, runner, caplog):
    caplog.set_level(logging.DEBUG, logger="halide_build")
    assert process.run(["c++", "-o", tmp_path / "my out"]) is True
    assert f"$ c++ -o '{tmp_path / 'my out'}'" in caplog.text
    assert runner.argvs == [["c++", "-o", str(tmp_path / "my out")]]


def test_run_logs_cwd_and_failure(tmp_path, runner, caplog):
    caplog.set_level(logging.DEBUG, logger="halide_build")
    runner.returncodes = [2]
    assert process.run(["make", "-j8"], cwd=tmp_path) is False
    assert f"(cd {tmp_path} && make -j8)" in caplog.text
    assert "make exited with status 2" in caplog.text
