from __future__ import annotations

from typing import Optional

from hkcalc.models.records import InputRecord, OutputRecord
from hkcalc.models.types import Category, Variant
from hkcalc.rules.tables import DEFAULT_RULES, RuleSet


def classify(
    variant: Variant,
    inp: InputRecord,
    rules: RuleSet = DEFAULT_RULES,
) -> Optional[Category]:
    table = rules.table_for(variant)
    observed = (inp.a, inp.b, inp.c)

    # Iterate in declared order so overlapping triples resolve M, then P, then T.
    for category in Category:
        if table.get(category) == observed:
            return category
    return None


def compute_value(variant: Variant, inp: InputRecord, category: Category) -> float:
    d = inp.d
    e = float(inp.e)
    f = float(inp.f)

    # Variant overrides
    if variant == Variant.CUSTOM2 and category == Category.M:
        return f + d + d * e / 100.0
    if variant == Variant.CUSTOM1 and category == Category.P:
        return 2.0 * d + d * e / 100.0

    if category == Category.M:
        return d + d * e / 10.0
    if category == Category.P:
        return d + d * (e - f) / 25.5
    if category == Category.T:
        return d - d * f / 30.0

    raise ValueError(f"No formula for category {category!r}")


def evaluate(
    variant: Variant,
    inp: InputRecord,
    rules: RuleSet = DEFAULT_RULES,
) -> Optional[OutputRecord]:
    h = classify(variant, inp, rules)
    if h is None:
        return None
    return OutputRecord(h=h, k=compute_value(variant, inp, h))
