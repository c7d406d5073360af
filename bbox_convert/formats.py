"""Имена форматов bbox и выбор пути конвертации между ними.

Любая пара форматов сводится к переходу через `CornerBox`. Исключение — пара
«центр+размер» ↔ «нормированный центр+размер»: она связана напрямую. Размер
изображения нужен только если один из концов нормированный, и передаётся явно.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from bbox_convert.boxes import (
    Box,
    CenterSizeBox,
    CornerBox,
    NormalizedCenterSizeBox,
    TopLeftSizeBox,
)
from bbox_convert.types import FloatVector, IntVector, to_int32


class ConfigurationError(ValueError):
    """Неизвестный формат или не задан размер изображения для нормированного формата."""


class BoxFormat(Enum):
    """Поддерживаемые представления bbox."""

    CORNER = "bbox"
    TOP_LEFT_SIZE = "tlbbox"
    CENTER_SIZE = "cbbox"
    NORMALIZED_CENTER_SIZE = "ncbbox"


# Сравнение точное, с учётом регистра.
FORMAT_ALIASES: dict[str, BoxFormat] = {
    "bb": BoxFormat.CORNER,
    "bbox": BoxFormat.CORNER,
    "xyxy": BoxFormat.CORNER,
    "tlbb": BoxFormat.TOP_LEFT_SIZE,
    "tlbbox": BoxFormat.TOP_LEFT_SIZE,
    "top-left-bounding-box": BoxFormat.TOP_LEFT_SIZE,
    "cbb": BoxFormat.CENTER_SIZE,
    "cbbox": BoxFormat.CENTER_SIZE,
    "center-bounding-box": BoxFormat.CENTER_SIZE,
    "ncbb": BoxFormat.NORMALIZED_CENTER_SIZE,
    "ncbbox": BoxFormat.NORMALIZED_CENTER_SIZE,
    "normalized-center-bounding-box": BoxFormat.NORMALIZED_CENTER_SIZE,
    "yolo": BoxFormat.NORMALIZED_CENTER_SIZE,
}

_BOX_TYPES: dict[BoxFormat, type] = {
    BoxFormat.CORNER: CornerBox,
    BoxFormat.TOP_LEFT_SIZE: TopLeftSizeBox,
    BoxFormat.CENTER_SIZE: CenterSizeBox,
    BoxFormat.NORMALIZED_CENTER_SIZE: NormalizedCenterSizeBox,
}


def parse_format(name: str) -> BoxFormat:
    """Ищет формат по псевдониму (`bbox`, `xyxy`, `yolo`, ...)."""
    try:
        return FORMAT_ALIASES[name]
    except KeyError:
        known = ", ".join(FORMAT_ALIASES)
        raise ConfigurationError(f"Неизвестный формат bbox: {name!r} (допустимо: {known})") from None


def format_of(box: Box) -> BoxFormat:
    """Возвращает формат, которому соответствует объект bbox."""
    for fmt, box_type in _BOX_TYPES.items():
        if isinstance(box, box_type):
            return fmt
    raise TypeError(f"Не bbox: {type(box).__name__}")


def requires_image_size(source: BoxFormat, target: BoxFormat) -> bool:
    """Нужен ли размер изображения для пары форматов."""
    return BoxFormat.NORMALIZED_CENTER_SIZE in (source, target)


def _need_image_size(image_size: FloatVector | None) -> FloatVector:
    if image_size is None:
        raise ConfigurationError("Нормированный формат требует ширину и высоту изображения")
    return image_size


def box_from_fields(fmt: BoxFormat, fields: Sequence[float]) -> Box:
    """Строит bbox формата `fmt` из четырёх чисел `(i, j, k, l)`.

    Для пиксельных форматов числа усекаются к целым, нормированный формат остаётся во float32.
    """
    if len(fields) != 4:
        raise ValueError(f"Ожидали 4 числа, получили {len(fields)}")
    i, j, k, l = fields
    if fmt is BoxFormat.NORMALIZED_CENTER_SIZE:
        return NormalizedCenterSizeBox(center=FloatVector(i, j), size=FloatVector(k, l))

    first = IntVector(to_int32(i), to_int32(j))
    second = IntVector(to_int32(k), to_int32(l))
    if fmt is BoxFormat.CORNER:
        return CornerBox(min=first, max=second)
    if fmt is BoxFormat.TOP_LEFT_SIZE:
        return TopLeftSizeBox(top_left=first, size=second)
    return CenterSizeBox(center=first, size=second)


def to_corner(box: Box, image_size: FloatVector | None = None) -> CornerBox:
    """Переводит любой bbox в канонический `CornerBox`."""
    if isinstance(box, CornerBox):
        return box
    if isinstance(box, NormalizedCenterSizeBox):
        return box.to_corner(_need_image_size(image_size))
    return box.to_corner()


def from_corner(box: CornerBox, target: BoxFormat, image_size: FloatVector | None = None) -> Box:
    """Переводит `CornerBox` в формат `target`."""
    if target is BoxFormat.CORNER:
        return box
    if target is BoxFormat.TOP_LEFT_SIZE:
        return TopLeftSizeBox.from_corner(box)
    if target is BoxFormat.CENTER_SIZE:
        return CenterSizeBox.from_corner(box)
    return NormalizedCenterSizeBox.from_corner(box, _need_image_size(image_size))


def convert_box(box: Box, target: BoxFormat, image_size: FloatVector | None = None) -> Box:
    """Конвертирует bbox в формат `target`.

    Тот же формат возвращается без изменений. Центр+размер и нормированный
    центр+размер связаны напрямую, остальное идёт через `CornerBox`.
    """
    source = format_of(box)
    if source is target:
        return box

    if source is BoxFormat.CENTER_SIZE and target is BoxFormat.NORMALIZED_CENTER_SIZE:
        return NormalizedCenterSizeBox.from_center(box, _need_image_size(image_size))
    if source is BoxFormat.NORMALIZED_CENTER_SIZE and target is BoxFormat.CENTER_SIZE:
        return box.to_center(_need_image_size(image_size))

    return from_corner(to_corner(box, image_size), target, image_size)


def convert_fields(
    source: BoxFormat,
    target: BoxFormat,
    fields: Sequence[float],
    image_size: FloatVector | None = None,
) -> Box:
    """Полный путь одной записи: четыре числа формата `source` -> bbox формата `target`."""
    return convert_box(box_from_fields(source, fields), target, image_size)
