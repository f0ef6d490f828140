from __future__ import annotations

import math
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hkcalc.models.types import Category

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class InputRecord(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    a: bool
    b: bool
    c: bool
    d: float
    # 32-bit signed range.
    e: int = Field(ge=INT32_MIN, le=INT32_MAX)
    f: int = Field(ge=INT32_MIN, le=INT32_MAX)


def format_k(k: float) -> str:
    """
    Render K in positional notation with the shortest round-trip digits.
    Integral values drop the trailing ".0" (60.0 -> "60").
    """
    if math.isnan(k):
        return "NaN"
    if math.isinf(k):
        return "inf" if k > 0 else "-inf"

    s = format(Decimal(repr(k)), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


class OutputRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    h: Category
    k: float

    def __str__(self) -> str:
        return f"H: {self.h.value}\nK: {format_k(self.k)}\n"
