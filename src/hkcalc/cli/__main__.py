from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from hkcalc.inputs.parser import ParseError, parse
from hkcalc.models.types import UnknownVariant, Variant
from hkcalc.rules.engine import evaluate
from hkcalc.rules.tables import DEFAULT_RULES, RuleSet, RulesConfigError, load_rules
from hkcalc.web.settings import LOG_LEVELS, Settings

logger = logging.getLogger(__name__)

# evaluate exit codes
EXIT_PARSE_ERROR = 1
EXIT_UNKNOWN_SUBSTITUTION = 2
EXIT_UNCLASSIFIABLE = 3
EXIT_RULES_ERROR = 4


def _rules(path: str | None) -> RuleSet:
    if not path:
        return DEFAULT_RULES
    return load_rules(Path(path))


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from hkcalc.web.app import create_app

    rules = _rules(args.rules)
    logger.info("Rules: %s", args.rules or "built-in")
    logger.info("Serving on http://%s:%d", args.host, args.port)
    uvicorn.run(
        create_app(rules),
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def _cmd_evaluate(args: argparse.Namespace) -> int:
    try:
        variant = Variant.parse(args.substitution)
    except UnknownVariant as e:
        print(e, file=sys.stderr)
        return EXIT_UNKNOWN_SUBSTITUTION

    try:
        rules = _rules(args.rules)
    except RulesConfigError as e:
        print(e, file=sys.stderr)
        return EXIT_RULES_ERROR

    try:
        if args.input == "-":
            text = sys.stdin.read()
        else:
            text = Path(args.input).read_text()
    except OSError as e:
        print(f"Cannot read input {args.input}: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    try:
        inp = parse(text)
    except ParseError as e:
        print(e, file=sys.stderr)
        return EXIT_PARSE_ERROR

    out = evaluate(variant, inp, rules)
    if out is None:
        print("Input matches no category for this substitution", file=sys.stderr)
        return EXIT_UNCLASSIFIABLE

    sys.stdout.write(str(out))
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    rules_default = str(settings.rules_path) if settings.rules_path else None

    p = argparse.ArgumentParser(prog="hkcalc")
    p.add_argument("--log-level", default=settings.log_level, choices=LOG_LEVELS, type=str.upper)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP service")
    p_serve.add_argument("--host", default=settings.host)
    p_serve.add_argument("--port", type=int, default=settings.port)
    p_serve.add_argument("--rules", default=rules_default, help="YAML rule override file")
    p_serve.set_defaults(func=_cmd_serve)

    p_eval = sub.add_parser("evaluate", help="Evaluate one input file and print H/K")
    p_eval.add_argument("--substitution", default=Variant.BASE.value)
    p_eval.add_argument("--rules", default=rules_default, help="YAML rule override file")
    p_eval.add_argument("input", help="YAML input file, or - for stdin")
    p_eval.set_defaults(func=_cmd_evaluate)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
