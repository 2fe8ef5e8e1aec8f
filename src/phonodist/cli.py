"""Command-line interface: distance, alignment and code generation."""

import argparse
import json
import logging
import sys
from pathlib import Path

from phonodist.errors import PhonodistError


def _add_inventory_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--inventory", type=Path, default=None,
                        help="Phoneme inventory JSON (default: $PHONODIST_INVENTORY or ./phonemes.json)")
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Log debug output, including alignment matrices")


def _add_sequence_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("seq1", help="First phoneme sequence, phonemes separated by spaces")
    parser.add_argument("seq2", help="Second phoneme sequence, phonemes separated by spaces")
    parser.add_argument("--separator", default=None,
                        help="Phoneme separator (default: any whitespace)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="phonodist",
        description="Phonetically weighted edit distance and dispatch code generation for IPA",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    distance_parser = subparsers.add_parser(
        "distance",
        help="Weighted phonetic distance between two sequences",
    )
    _add_sequence_args(distance_parser)
    _add_inventory_arg(distance_parser)

    align_parser = subparsers.add_parser(
        "align",
        help="Edit operations aligning two sequences",
    )
    _add_sequence_args(align_parser)
    _add_inventory_arg(align_parser)
    align_parser.add_argument("--json", action="store_true", default=False,
                              help="Print the alignment as JSON")

    codegen_parser = subparsers.add_parser(
        "codegen",
        help="Generate byte-dispatch segmentation and cost code",
        description="Compile the inventory into next_phoneme_length / phonetic_cost source",
    )
    codegen_parser.add_argument("unit", choices=["boundary", "cost", "all"],
                                help="Which function(s) to generate")
    codegen_parser.add_argument("--target", default="c", choices=["c", "python"],
                                help="Output language (default: c)")
    codegen_parser.add_argument("--output", type=Path, default=None,
                                help="Write to this file instead of stdout")
    _add_inventory_arg(codegen_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "codegen" and args.unit == "cost" and args.target == "python":
        # The Python cost unit calls next_phoneme_length from the boundary unit
        codegen_parser.error("the python cost unit needs next_phoneme_length; generate 'all' instead")

    return args


def _split(text: str, separator: str | None) -> list[str]:
    return [token for token in text.split(separator) if token]


def _run_distance(args: argparse.Namespace) -> None:
    from phonodist.inventory import load_inventory
    from phonodist.levenshtein import distance

    config = load_inventory(args.inventory)
    result = distance(config, _split(args.seq1, args.separator), _split(args.seq2, args.separator))
    print(f"{result:.4f}")


def _run_align(args: argparse.Namespace) -> None:
    from phonodist.inventory import load_inventory
    from phonodist.levenshtein import align

    config = load_inventory(args.inventory)
    steps = align(config, _split(args.seq1, args.separator), _split(args.seq2, args.separator))
    if args.json:
        print(json.dumps([s.to_dict() for s in steps], ensure_ascii=False, indent=2))
        return
    for step in steps:
        source = step.source if step.source is not None else "-"
        target = step.target if step.target is not None else "-"
        print(f"{step.operation:<10} {source:>4} {target:>4}  {step.cost:.4f}")


def _run_codegen(args: argparse.Namespace) -> None:
    from phonodist.codegen import CodeGenerator
    from phonodist.inventory import load_inventory

    config = load_inventory(args.inventory)
    logger = logging.getLogger("phonodist.codegen")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        writer = open(args.output, "w", encoding="utf-8")
    else:
        writer = sys.stdout

    try:
        generator = CodeGenerator(config, writer=writer, dialect=args.target)
        if args.unit == "boundary":
            generator.generate_next_phoneme_length_code()
        elif args.unit == "cost":
            generator.generate_phonetic_cost_code()
        else:
            generator.generate_all()
    finally:
        if writer is not sys.stdout:
            writer.close()

    if args.output is not None:
        logger.info(f"Output: {args.output}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    try:
        if args.command == "distance":
            _run_distance(args)
        elif args.command == "align":
            _run_align(args)
        elif args.command == "codegen":
            _run_codegen(args)
    except (PhonodistError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
