import pytest

from hkcalc.models.types import Category, Variant
from hkcalc.rules.tables import BASE_TABLE, DEFAULT_RULES, RulesConfigError, build_rules, load_rules


def test_default_tables():
    assert dict(DEFAULT_RULES.table_for(Variant.BASE)) == {
        Category.M: (True, True, False),
        Category.P: (True, True, True),
        Category.T: (False, True, True),
    }
    assert dict(DEFAULT_RULES.table_for(Variant.CUSTOM2)) == {
        Category.M: (True, False, True),
        Category.P: (True, True, True),
        Category.T: (True, True, False),
    }


def test_variant_without_table_falls_back_to_base():
    assert Variant.CUSTOM1 not in DEFAULT_RULES.tables
    assert DEFAULT_RULES.table_for(Variant.CUSTOM1) is DEFAULT_RULES.table_for(Variant.BASE)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_RULES.table_for(Variant.BASE)[Category.M] = (False, False, False)
    with pytest.raises(TypeError):
        DEFAULT_RULES.tables[Variant.CUSTOM1] = {}


def test_build_rules_does_not_touch_base_table():
    build_rules({Variant.BASE: {Category.M: (False, False, False)}})
    assert BASE_TABLE[Category.M] == (True, True, False)


def test_base_override_is_inherited():
    rules = build_rules({
        Variant.BASE: {Category.T: (False, False, True)},
        Variant.CUSTOM1: {Category.M: (False, False, False)},
    })
    assert rules.table_for(Variant.CUSTOM1)[Category.T] == (False, False, True)
    assert rules.table_for(Variant.CUSTOM2)[Category.T] == (False, False, True)
    assert rules.table_for(Variant.CUSTOM1)[Category.M] == (False, False, False)
    assert rules.table_for(Variant.BASE)[Category.M] == (True, True, False)


def test_load_rules_layers_on_defaults(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("custom1:\n  P: [true, false, false]\n")
    rules = load_rules(path)
    assert rules.table_for(Variant.CUSTOM1)[Category.P] == (True, False, False)
    assert rules.table_for(Variant.CUSTOM1)[Category.M] == (True, True, False)
    assert dict(rules.table_for(Variant.CUSTOM2)) == dict(DEFAULT_RULES.table_for(Variant.CUSTOM2))


def test_load_rules_empty_file_is_defaults(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("")
    rules = load_rules(path)
    for v in Variant:
        assert dict(rules.table_for(v)) == dict(DEFAULT_RULES.table_for(v))


@pytest.mark.parametrize(
    "text",
    [
        "custom3:\n  M: [true, true, true]\n",
        "base:\n  X: [true, true, true]\n",
        "base:\n  M: [true, true]\n",
        "base:\n  M: [1, 0, 1]\n",
        "base: [true]\n",
        "base:\n  M: [true\n",
    ],
)
def test_load_rules_rejects_bad_files(tmp_path, text):
    path = tmp_path / "rules.yaml"
    path.write_text(text)
    with pytest.raises(RulesConfigError):
        load_rules(path)


def test_load_rules_missing_file(tmp_path):
    with pytest.raises(RulesConfigError):
        load_rules(tmp_path / "nope.yaml")
