"""CLI `bboxconvert`: конвертация bbox между форматами (stdin -> stdout).

Пример:

    echo "10,20,30,60" | bboxconvert -i bbox -o tlbbox
    10,20,20,40

Для нормированного формата (`yolo`) нужны ширина и высота изображения:
`-w/--width`, `-H/--height` или переменные окружения `BBOXCONVERT_WIDTH`, `BBOXCONVERT_HEIGHT`.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import TextIO

from bbox_convert.formats import FORMAT_ALIASES, BoxFormat, ConfigurationError, parse_format, requires_image_size
from bbox_convert.records import RecordParseError, convert_stream
from bbox_convert.types import INT32_MAX, INT32_MIN, FloatVector


PROG = "bboxconvert"
ENV_WIDTH = "BBOXCONVERT_WIDTH"
ENV_HEIGHT = "BBOXCONVERT_HEIGHT"


def _format_arg(value: str) -> BoxFormat:
    """`type=` для argparse: псевдоним -> `BoxFormat`."""
    try:
        return parse_format(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _int32_arg(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ожидали целое число, получили {value!r}") from None
    if not (INT32_MIN <= number <= INT32_MAX):
        raise argparse.ArgumentTypeError(f"{number} вне диапазона int32")
    return number


def _env_int(name: str) -> int | None:
    """Читает целое из переменной окружения (пустая/отсутствующая -> `None`)."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return _int32_arg(raw)
    except argparse.ArgumentTypeError as e:
        raise ConfigurationError(f"{name}: {e}") from None


def build_parser() -> argparse.ArgumentParser:
    """Возвращает CLI parser конвертера."""
    aliases = ", ".join(FORMAT_ALIASES)
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Конвертация bounding box между форматами. Читает CSV (i,j,k,l) из stdin, пишет в stdout.",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=_format_arg,
        required=True,
        help=f"Формат входных bbox ({aliases})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=_format_arg,
        required=True,
        help="Формат выходных bbox (те же псевдонимы)",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=_int32_arg,
        default=None,
        help=f"Ширина изображения в пикселях (нужна для нормированного формата; по умолчанию ${ENV_WIDTH})",
    )
    parser.add_argument(
        "-H",
        "--height",
        type=_int32_arg,
        default=None,
        help=f"Высота изображения в пикселях (нужна для нормированного формата; по умолчанию ${ENV_HEIGHT})",
    )
    return parser


def resolve_image_size(
    source: BoxFormat,
    target: BoxFormat,
    width: int | None,
    height: int | None,
) -> FloatVector | None:
    """Размер изображения для пары форматов; `None`, если он не нужен.

    Явные значения важнее переменных окружения. Для нормированного конца
    нужны обе размерности, иначе `ConfigurationError`.
    """
    if not requires_image_size(source, target):
        return None
    if width is None:
        width = _env_int(ENV_WIDTH)
    if height is None:
        height = _env_int(ENV_HEIGHT)
    missing = [flag for flag, v in (("--width", width), ("--height", height)) if v is None]
    if missing:
        raise ConfigurationError(f"Нормированный формат требует {' и '.join(missing)}")
    return FloatVector(width, height)


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """CLI entrypoint конвертера."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        image_size = resolve_image_size(args.input, args.output, args.width, args.height)
    except ConfigurationError as e:
        parser.error(str(e))

    src = stdin if stdin is not None else sys.stdin
    dst = stdout if stdout is not None else sys.stdout
    try:
        convert_stream(src, dst, args.input, args.output, image_size)
    except RecordParseError as e:
        print(f"{PROG}: ошибка: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    """Точка входа для команды `bboxconvert`."""
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
