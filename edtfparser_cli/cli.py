import argparse
import json
import logging
import sys

import edtfparser
from edtfparser.relations.evaluator import RELATIONS


def _print_json(data):
    print(json.dumps(data, indent=2))


def _parse_command(args):
    result = edtfparser.parse(args.edtf, level=args.level)
    _print_json(result.to_dict())
    return 0 if result.success else 1


def _normalize_command(args):
    result = edtfparser.parse(args.edtf, level=args.level)
    if not result.success:
        _print_json(result.to_dict())
        return 1
    if args.hull:
        _print_json(edtfparser.normalize_to_convex_hull(result.value).to_dict())
    else:
        _print_json(edtfparser.normalize(result.value).to_dict())
    return 0


def _compare_command(args):
    try:
        truth = edtfparser.evaluate(args.a, args.b, args.relation, quantifier=args.quantifier)
    except ValueError as e:
        logging.error("edtfparser: %s", e)
        return 1
    print(truth.value)
    return 0


def entrance(argv=None):
    edtfparser_argparse = argparse.ArgumentParser(
        description="Parse, normalize and compare EDTF (ISO 8601-2) dates."
    )
    edtfparser_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log level detection, fallbacks and range expansion",
        action="store_true",
    )
    subcommands = edtfparser_argparse.add_subparsers(dest="command")

    parse_argparse = subcommands.add_parser("parse", help="Print the parsed value as JSON")
    parse_argparse.add_argument("edtf", type=str)
    parse_argparse.add_argument("--level", type=int, choices=(0, 1, 2))
    parse_argparse.set_defaults(handler=_parse_command)

    normalize_argparse = subcommands.add_parser(
        "normalize", help="Print the normalized members as JSON"
    )
    normalize_argparse.add_argument("edtf", type=str)
    normalize_argparse.add_argument("--level", type=int, choices=(0, 1, 2))
    normalize_argparse.add_argument(
        "--hull", help="Collapse sets and lists into their convex hull", action="store_true"
    )
    normalize_argparse.set_defaults(handler=_normalize_command)

    compare_argparse = subcommands.add_parser(
        "compare", help="Evaluate a relation between two EDTF values"
    )
    compare_argparse.add_argument("a", type=str)
    compare_argparse.add_argument("b", type=str)
    compare_argparse.add_argument(
        "-r", "--relation", type=str, default="intersects", choices=sorted(RELATIONS)
    )
    compare_argparse.add_argument(
        "-q", "--quantifier", type=str.upper, choices=("ANY", "ALL")
    )
    compare_argparse.set_defaults(handler=_compare_command)

    args = edtfparser_argparse.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if not args.command:
        edtfparser_argparse.error(
            "edtfparser: You need to specify the command (i.e.: parse, normalize or compare)"
        )

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(entrance())
