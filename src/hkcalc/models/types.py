from enum import Enum


class UnknownVariant(ValueError):
    pass


class Category(str, Enum):
    # Declaration order is the classification tie-break order.
    M = "M"
    P = "P"
    T = "T"


class Variant(str, Enum):
    BASE = "base"
    CUSTOM1 = "custom1"
    CUSTOM2 = "custom2"

    @classmethod
    def parse(cls, name: str) -> "Variant":
        # Exact, case-sensitive match on the wire name.
        for v in cls:
            if v.value == name:
                return v
        raise UnknownVariant(f"Unknown substitution: {name!r}")
