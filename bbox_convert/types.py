"""Базовые векторные типы: целочисленный (пиксели) и float32 (нормированные доли)."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)


def trunc_div(a: int, b: int) -> int:
    """Целочисленное деление с отбрасыванием дробной части (к нулю, а не вниз).

    `trunc_div(-3, 2) == -1`, тогда как `-3 // 2 == -2`.
    """
    a = int(a)
    b = int(b)
    if b == 0:
        raise ZeroDivisionError("целочисленное деление на ноль")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def wrap_int32(value: int) -> int:
    """Заворачивает целое в диапазон int32 (дополнительный код), без проверки переполнения."""
    return ((int(value) - INT32_MIN) % 2**32) + INT32_MIN


def to_int32(value) -> int:
    """Приводит float к int32 как нативный cast: отбрасывает дробь, NaN -> 0, насыщение по краям."""
    v = np.nan_to_num(np.trunc(np.float64(value)), nan=0.0, posinf=INT32_MAX, neginf=INT32_MIN)
    return int(np.clip(v, INT32_MIN, INT32_MAX))


@dataclass(frozen=True)
class IntVector:
    """2D вектор в пиксельных координатах.

    Компоненты — int32: результат арифметики заворачивается при переполнении.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", wrap_int32(self.x))
        object.__setattr__(self, "y", wrap_int32(self.y))

    def _pair(self, other: "IntVector | int") -> tuple[int, int]:
        if isinstance(other, IntVector):
            return other.x, other.y
        return int(other), int(other)

    def __add__(self, other: "IntVector | int") -> "IntVector":
        ox, oy = self._pair(other)
        return IntVector(self.x + ox, self.y + oy)

    def __sub__(self, other: "IntVector | int") -> "IntVector":
        ox, oy = self._pair(other)
        return IntVector(self.x - ox, self.y - oy)

    def __mul__(self, other: "IntVector | int") -> "IntVector":
        ox, oy = self._pair(other)
        return IntVector(self.x * ox, self.y * oy)

    def __truediv__(self, other: "IntVector | int") -> "IntVector":
        """Покомпонентное целочисленное деление с усечением к нулю."""
        ox, oy = self._pair(other)
        return IntVector(trunc_div(self.x, ox), trunc_div(self.y, oy))

    def to_float(self) -> "FloatVector":
        """Расширение до float32 (точно для |v| < 2**24)."""
        return FloatVector(self.x, self.y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class FloatVector:
    """2D вектор float32 (доли размера изображения или сам размер изображения)."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", np.float32(self.x))
        object.__setattr__(self, "y", np.float32(self.y))

    def _pair(self, other: "FloatVector | float") -> tuple[np.float32, np.float32]:
        if isinstance(other, FloatVector):
            return other.x, other.y
        return np.float32(other), np.float32(other)

    def __add__(self, other: "FloatVector | float") -> "FloatVector":
        ox, oy = self._pair(other)
        with np.errstate(over="ignore", invalid="ignore"):
            return FloatVector(self.x + ox, self.y + oy)

    def __sub__(self, other: "FloatVector | float") -> "FloatVector":
        ox, oy = self._pair(other)
        with np.errstate(over="ignore", invalid="ignore"):
            return FloatVector(self.x - ox, self.y - oy)

    def __mul__(self, other: "FloatVector | float") -> "FloatVector":
        ox, oy = self._pair(other)
        with np.errstate(over="ignore", invalid="ignore"):
            return FloatVector(self.x * ox, self.y * oy)

    def __truediv__(self, other: "FloatVector | float") -> "FloatVector":
        """Покомпонентное деление; деление на 0 даёт inf/NaN по IEEE без ошибки."""
        ox, oy = self._pair(other)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return FloatVector(np.divide(self.x, ox), np.divide(self.y, oy))

    def to_int(self) -> IntVector:
        """Усечение каждой компоненты к нулю (с потерей точности)."""
        return IntVector(to_int32(self.x), to_int32(self.y))

    def as_tuple(self) -> tuple[np.float32, np.float32]:
        return (self.x, self.y)


def format_value(value) -> str:
    """Форматирует компоненту для вывода.

    Целые — как есть. float32 — кратчайшей записью, которая однозначно
    восстанавливает значение float32, без хвостового `.0`: `0.5`, `1`, `0.33333334`.
    Нечисловые значения: `inf`, `-inf`, `NaN`.
    """
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    v = np.float32(value)
    if np.isnan(v):
        return "NaN"
    if np.isinf(v):
        return "inf" if v > 0 else "-inf"
    return np.format_float_positional(v, trim="-")
