"""Чтение записей bbox из CSV и запись результата построчно.

Формат записи: CSV без заголовка, ровно четыре числа `i,j,k,l` в строке.
Числа читаются как float32 независимо от формата; пустые строки пропускаются.
"""

from __future__ import annotations

import csv
from typing import Iterator, Sequence, TextIO

import numpy as np

from bbox_convert.boxes import Box
from bbox_convert.formats import BoxFormat, convert_fields
from bbox_convert.types import FloatVector


RECORD_FIELDS = ("i", "j", "k", "l")

Record = tuple[np.float32, np.float32, np.float32, np.float32]


class RecordParseError(ValueError):
    """Запись не удалось разобрать: не то число полей или поле не число."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"строка {line_number}: {message}"
        super().__init__(message)


def parse_record(row: Sequence[str], line_number: int | None = None) -> Record:
    """Парсит одну CSV‑строку в четыре float32."""
    if len(row) != len(RECORD_FIELDS):
        raise RecordParseError(f"ожидали 4 поля, получили {len(row)}", line_number)

    values = []
    for name, raw in zip(RECORD_FIELDS, row):
        try:
            if "_" in raw:
                raise ValueError(raw)
            with np.errstate(over="ignore"):
                values.append(np.float32(float(raw)))
        except ValueError:
            raise RecordParseError(f"поле {name}={raw!r} не является числом", line_number) from None
    return tuple(values)


def read_records(stream: TextIO) -> Iterator[Record]:
    """Лениво читает записи из потока, по одной."""
    reader = csv.reader(stream)
    for row in reader:
        if not row:
            continue
        yield parse_record(row, reader.line_num)


def format_box(box: Box) -> str:
    """Строка вывода: четыре поля через запятую."""
    return str(box)


def convert_stream(
    src: TextIO,
    dst: TextIO,
    source: BoxFormat,
    target: BoxFormat,
    image_size: FloatVector | None = None,
) -> int:
    """Конвертирует все записи `src` и пишет по строке в `dst`.

    Останавливается на первой битой записи (уже записанные строки остаются).
    Возвращает число записанных строк.
    """
    written = 0
    for record in read_records(src):
        box = convert_fields(source, target, record, image_size)
        dst.write(format_box(box) + "\n")
        dst.flush()
        written += 1
    return written
