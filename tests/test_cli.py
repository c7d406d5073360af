import io

import pytest

from bbox_convert.cli import ENV_HEIGHT, ENV_WIDTH, build_parser, main, resolve_image_size
from bbox_convert.formats import BoxFormat, ConfigurationError
from bbox_convert.types import FloatVector


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(ENV_WIDTH, raising=False)
    monkeypatch.delenv(ENV_HEIGHT, raising=False)


def run(argv, text):
    out = io.StringIO()
    code = main(argv, stdin=io.StringIO(text), stdout=out)
    return code, out.getvalue()


def test_bbox_to_tlbbox():
    assert run(["-i", "bbox", "-o", "tlbbox"], "10,20,30,60\n") == (0, "10,20,20,40\n")


def test_cbbox_to_bbox_long_options():
    code, out = run(["--input", "center-bounding-box", "--output", "xyxy"], "20,40,20,40\n")
    assert code == 0
    assert out == "10,20,30,60\n"


def test_yolo_round_trip_through_cli():
    code, out = run(["-i", "cbb", "-o", "yolo", "-w", "200", "-H", "200"], "100,100,50,50\n")
    assert (code, out) == (0, "0.5,0.5,0.25,0.25\n")
    code, out = run(["-i", "yolo", "-o", "cbb", "--width", "200", "--height", "200"], out)
    assert (code, out) == (0, "100,100,50,50\n")


def test_unknown_format_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(["-i", "coco", "-o", "bbox"], "1,2,3,4\n")
    assert exc_info.value.code == 2
    assert "coco" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["-i", "yolo", "-o", "bbox"],
        ["-i", "bbox", "-o", "ncbbox"],
        ["-i", "bbox", "-o", "yolo", "-w", "640"],
        ["-i", "ncbb", "-o", "ncbb", "-H", "480"],
    ],
)
def test_missing_image_size_fails_before_reading(argv):
    stdin = io.StringIO("1,2,3,4\n")
    out = io.StringIO()
    with pytest.raises(SystemExit) as exc_info:
        main(argv, stdin=stdin, stdout=out)
    assert exc_info.value.code == 2
    assert stdin.tell() == 0
    assert out.getvalue() == ""


def test_image_size_from_environment(monkeypatch):
    monkeypatch.setenv(ENV_WIDTH, "200")
    monkeypatch.setenv(ENV_HEIGHT, "100")
    assert run(["-i", "bbox", "-o", "yolo"], "50,25,150,75\n") == (0, "0.5,0.5,0.5,0.5\n")


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv(ENV_WIDTH, "1")
    monkeypatch.setenv(ENV_HEIGHT, "1")
    size = resolve_image_size(BoxFormat.CORNER, BoxFormat.NORMALIZED_CENTER_SIZE, 640, 480)
    assert size == FloatVector(640, 480)


def test_bad_environment_value(monkeypatch):
    monkeypatch.setenv(ENV_WIDTH, "wide")
    with pytest.raises(ConfigurationError):
        resolve_image_size(BoxFormat.NORMALIZED_CENTER_SIZE, BoxFormat.CORNER, None, 480)


def test_image_size_ignored_for_pixel_formats():
    assert resolve_image_size(BoxFormat.CORNER, BoxFormat.CENTER_SIZE, None, None) is None


def test_bad_record_exits_with_error(capsys):
    out = io.StringIO()
    code = main(["-i", "bbox", "-o", "bbox"], stdin=io.StringIO("1,2,3,4\n1,2\n9,9,9,9\n"), stdout=out)
    assert code == 1
    assert out.getvalue() == "1,2,3,4\n"
    assert "строка 2" in capsys.readouterr().err


def test_help_does_not_clash_with_height():
    parser = build_parser()
    args = parser.parse_args(["-i", "bb", "-o", "bb", "-H", "10", "-w", "20"])
    assert (args.width, args.height) == (20, 10)


def test_full_int32_span_wraps_like_int32():
    assert run(["-i", "bbox", "-o", "tlbbox"], "-2147483648,0,2147483647,0\n") == (0, "-2147483648,0,-1,0\n")
