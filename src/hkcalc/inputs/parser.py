from __future__ import annotations

import re
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from hkcalc.models.records import InputRecord

REQUIRED_KEYS = ("a", "b", "c", "d", "e", "f")

BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


class ParseError(ValueError):
    pass


class _InputLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 core-schema scalars: only true/false are booleans,
    integers are plain decimal (no octal, hex, sexagesimal or underscores) and
    floats accept exponents without a dot.
    """


_InputLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if tag not in (BOOL_TAG, INT_TAG, FLOAT_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_InputLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
# Registered before floats so that plain digits resolve as integers.
_InputLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^[-+]?[0-9]+$"),
    list("-+0123456789"),
)
_InputLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+.0123456789"),
)


def _construct_int(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> int:
    # Leading zeros are decimal, not octal.
    return int(loader.construct_scalar(node))


_InputLoader.add_constructor(INT_TAG, _construct_int)


def _fold_keys(doc: Dict[Any, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, val in doc.items():
        if not isinstance(key, str):
            raise ParseError(f"Keys must be strings, got {key!r}")
        name = key.lower()
        if name in out:
            raise ParseError(f"Duplicate key: {key}")
        out[name] = val
    return out


def parse(text: str) -> InputRecord:
    try:
        doc = yaml.load(text, Loader=_InputLoader)
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: explicit !!int tags on non-decimal text.
        raise ParseError(f"Malformed input: {e}") from e

    if not isinstance(doc, dict):
        raise ParseError("Input must be a mapping of KEY: value lines")

    fields = _fold_keys(doc)
    missing = [k.upper() for k in REQUIRED_KEYS if k not in fields]
    if missing:
        raise ParseError(f"Missing keys: {', '.join(missing)}")

    try:
        return InputRecord(**{k: fields[k] for k in REQUIRED_KEYS})
    except ValidationError as e:
        bad = sorted({str(err["loc"][0]).upper() for err in e.errors()})
        raise ParseError(f"Invalid values for: {', '.join(bad)}") from e
