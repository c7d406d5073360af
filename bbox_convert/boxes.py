"""Четыре представления ограничивающего прямоугольника и переходы между ними.

Канонический «хаб» — `CornerBox` (углы min/max). Остальные представления
конвертируются в него и из него напрямую:

- `TopLeftSizeBox`: левый верхний угол + (ширина, высота), как bbox в COCO;
- `CenterSizeBox`: центр + (ширина, высота) в пикселях;
- `NormalizedCenterSizeBox`: центр + размер в долях изображения `[0..1]`, как в разметке YOLO.

Начало координат — левый верхний угол изображения. Корректность бокса (max >= min)
не проверяется: вырожденные боксы проходят как есть.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from bbox_convert.types import FloatVector, IntVector, format_value


def _join(values) -> str:
    return ",".join(format_value(v) for v in values)


@dataclass(frozen=True)
class CornerBox:
    """Bbox по пикселям левого верхнего (`min`) и правого нижнего (`max`) углов."""

    min: IntVector
    max: IntVector

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Возвращает `(min.x, min.y, max.x, max.y)`."""
        return (*self.min.as_tuple(), *self.max.as_tuple())

    def __str__(self) -> str:
        return _join(self.as_tuple())


@dataclass(frozen=True)
class TopLeftSizeBox:
    """Bbox по левому верхнему углу и размеру (ширина, высота) в пикселях."""

    top_left: IntVector
    size: IntVector

    @classmethod
    def from_corner(cls, box: CornerBox) -> "TopLeftSizeBox":
        return cls(top_left=box.min, size=box.max - box.min)

    def to_corner(self) -> CornerBox:
        return CornerBox(min=self.top_left, max=self.top_left + self.size)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (*self.top_left.as_tuple(), *self.size.as_tuple())

    def __str__(self) -> str:
        return _join(self.as_tuple())


@dataclass(frozen=True)
class CenterSizeBox:
    """Bbox по центру и размеру (ширина, высота) в пикселях."""

    center: IntVector
    size: IntVector

    @classmethod
    def from_corner(cls, box: CornerBox) -> "CenterSizeBox":
        """Центр считается как `min + size / 2` с усечением к нулю.

        Для нечётного размера центр смещён к `min` на полпикселя. Обратный переход
        использует ту же половину размера, поэтому `size` восстанавливается точно.
        """
        size = box.max - box.min
        center = (size / 2) + box.min
        return cls(center=center, size=size)

    def to_corner(self) -> CornerBox:
        min_ = self.center - (self.size / 2)
        return CornerBox(min=min_, max=min_ + self.size)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (*self.center.as_tuple(), *self.size.as_tuple())

    def __str__(self) -> str:
        return _join(self.as_tuple())


@dataclass(frozen=True)
class NormalizedCenterSizeBox:
    """Bbox по центру и размеру в долях размера изображения (float32).

    Без `image_size` (ширина, высота изображения) в пиксели не переводится.
    Диапазон `[0..1]` не проверяется; нулевой размер изображения даёт inf/NaN.
    """

    center: FloatVector
    size: FloatVector

    @classmethod
    def from_center(cls, box: CenterSizeBox, image_size: FloatVector) -> "NormalizedCenterSizeBox":
        return cls(
            center=box.center.to_float() / image_size,
            size=box.size.to_float() / image_size,
        )

    def to_center(self, image_size: FloatVector) -> CenterSizeBox:
        """Обратно в пиксели; дробная часть отбрасывается (усечение к нулю)."""
        return CenterSizeBox(
            center=(self.center * image_size).to_int(),
            size=(self.size * image_size).to_int(),
        )

    @classmethod
    def from_corner(cls, box: CornerBox, image_size: FloatVector) -> "NormalizedCenterSizeBox":
        return cls.from_center(CenterSizeBox.from_corner(box), image_size)

    def to_corner(self, image_size: FloatVector) -> CornerBox:
        return self.to_center(image_size).to_corner()

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (*self.center.as_tuple(), *self.size.as_tuple())

    def __str__(self) -> str:
        return _join(self.as_tuple())


Box = Union[CornerBox, TopLeftSizeBox, CenterSizeBox, NormalizedCenterSizeBox]
