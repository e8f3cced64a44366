import pytest

from halide_build.template import render_generator, write_generator


def test_render_default():
    src = render_generator()
    assert src.startswith("#include <Halide.h>\n")
    assert "class Filter: public Generator<Filter> {" in src
    assert 'Input<Buffer<float>> input{"input", 3};' in src
    assert 'Output<Buffer<float>> output{"output", 3};' in src
    assert src.rstrip().endswith("HALIDE_REGISTER_GENERATOR(Filter, filter);")


def test_render_custom_names():
    src = render_generator("Blur", "box_blur")
    assert "class Blur: public Generator<Blur>" in src
    assert "HALIDE_REGISTER_GENERATOR(Blur, box_blur);" in src


def test_render_rejects_bad_class_name():
    with pytest.raises(ValueError):
        render_generator("not a class")


def test_write_refuses_to_overwrite(tmp_path):
    dest = tmp_path / "gen.cpp"
    dest.write_text("existing")
    with pytest.raises(FileExistsError):
        write_generator(dest)
    assert dest.read_text() == "existing"

    write_generator(dest, class_name="Sharpen", force=True)
    assert "HALIDE_REGISTER_GENERATOR(Sharpen, sharpen);" in dest.read_text()


def test_render_has_vars_and_empty_stages():
    src = render_generator()
    assert "    Var x, y, c;\n" in src
    assert "    void generate(){\n\n    }\n" in src
    assert "    void schedule(){\n\n    }\n" in src


@pytest.mark.parametrize("name", ["class", "int", "Fïlter", "2pass", ""])
def test_render_rejects_names_that_do_not_compile(name):
    with pytest.raises(ValueError):
        render_generator(name)
