from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import yaml
from pydantic import RootModel, StrictBool, ValidationError

from hkcalc.models.types import Category, Variant

Triple = Tuple[bool, bool, bool]
Table = Mapping[Category, Triple]


class RulesConfigError(ValueError):
    pass


BASE_TABLE: Dict[Category, Triple] = {
    Category.M: (True, True, False),
    Category.P: (True, True, True),
    Category.T: (False, True, True),
}

# Per-variant replacements applied on top of the base table.
DEFAULT_OVERRIDES: Dict[Variant, Dict[Category, Triple]] = {
    Variant.CUSTOM2: {
        Category.T: (True, True, False),
        Category.M: (True, False, True),
    },
}


@dataclass(frozen=True)
class RuleSet:
    tables: Mapping[Variant, Table]

    def table_for(self, variant: Variant) -> Table:
        # Variants without their own table inherit the base one.
        table = self.tables.get(variant)
        if table is None:
            table = self.tables[Variant.BASE]
        return table


def build_rules(overrides: Optional[Mapping[Variant, Mapping[Category, Triple]]] = None) -> RuleSet:
    overrides = dict(overrides or {})

    base = dict(BASE_TABLE)
    base.update(overrides.pop(Variant.BASE, {}))

    tables: Dict[Variant, Table] = {Variant.BASE: MappingProxyType(base)}
    for variant, repl in overrides.items():
        table = dict(base)
        table.update(repl)
        tables[variant] = MappingProxyType(table)

    return RuleSet(tables=MappingProxyType(tables))


DEFAULT_RULES = build_rules(DEFAULT_OVERRIDES)


class RulesFile(RootModel[Dict[Variant, Dict[Category, Tuple[StrictBool, StrictBool, StrictBool]]]]):
    pass


def load_rules(path: Path) -> RuleSet:
    """
    Build a RuleSet from a YAML override file, layered on the built-in tables:

        custom1:
          P: [true, false, false]
    """
    try:
        doc = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise RulesConfigError(f"Cannot read rules file {path}: {e}") from e

    try:
        parsed = RulesFile.model_validate(doc or {})
    except ValidationError as e:
        raise RulesConfigError(f"Invalid rules file {path}: {e}") from e

    merged: Dict[Variant, Dict[Category, Triple]] = {
        v: dict(repl) for v, repl in DEFAULT_OVERRIDES.items()
    }
    for variant, repl in parsed.root.items():
        merged.setdefault(variant, {}).update(repl)
    return build_rules(merged)
