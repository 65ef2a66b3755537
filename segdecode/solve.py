"""
Harness + Receipts Runner

Reads puzzle entries (stdin by default), decodes every entry and prints both
answers. Any parse or decode failure aborts the run before anything is
printed.

Modes:
  - answers: print "Part 1 answer: N" and "Part 2 answer: N"
  - receipts: write one JSONL receipt per entry
  - audit: print a stored receipt

CLI:
  python -m segdecode.solve < input.txt
  python -m segdecode.solve --input input.txt
  python -m segdecode.solve --mode receipts --input input.txt --out outputs/receipts.jsonl
  python -m segdecode.solve --mode audit --receipts outputs/receipts.jsonl --index 3
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from segdecode.entries import Entry, load_entries, read_input
from segdecode.errors import DecodeError, exit_code_for
from segdecode.puzzle import part1, part2, solve_entries
from segdecode.receipts import build_entry_receipt, find_receipt, write_jsonl


def load_entries_from(path: Optional[Path]) -> List[Entry]:
    """
    Load entries from a file, or from stdin when path is None or "-".

    Exits with status 1 if the file does not exist or cannot be read.
    """
    if path is not None and str(path) != "-" and not path.exists():
        logging.error(f"Input file not found: {path}")
        raise SystemExit(1)

    try:
        text = read_input(path)
    except OSError as e:
        logging.error(f"Cannot read input {path}: {e.strerror or e}")
        raise SystemExit(1)

    return load_entries(text)


def run_answers(entries: List[Entry]) -> None:
    """Solve every entry, then print both answers."""
    solutions = solve_entries(entries)

    answer1 = part1(solutions)
    answer2 = part2(solutions)

    print(f"Part 1 answer: {answer1}")
    print(f"Part 2 answer: {answer2}")

    logging.info(f"Processed entries={len(solutions)}")


def run_receipts(entries: List[Entry], out_path: Path) -> None:
    """Solve every entry and write one receipt per entry."""
    solutions = solve_entries(entries)
    receipts = [
        build_entry_receipt(solution, entry_index)
        for entry_index, solution in enumerate(solutions)
    ]

    written = write_jsonl(out_path, receipts)
    idempotence_fail = sum(1 for r in receipts if not r["pass_idempotent"])

    logging.info(
        f"Processed entries={written}, idempotence_fail={idempotence_fail}, "
        f"part1={part1(solutions)}, part2={part2(solutions)}"
    )
    logging.info(f"Receipts written to: {out_path}")


def run_audit(entry_index: int, receipts_path: Path) -> None:
    """Print the stored receipt for one entry."""
    if not receipts_path.exists():
        logging.error(f"Receipts not found: {receipts_path}")
        raise SystemExit(1)

    receipt = find_receipt(receipts_path, entry_index)
    if receipt is None:
        logging.error(f"Entry {entry_index} not found in receipts")
        raise SystemExit(1)

    print(json.dumps(receipt, indent=2, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="segdecode",
        description="Seven-segment signal decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--mode",
        type=str,
        default="answers",
        choices=["answers", "receipts", "audit"],
        help="answers (print both parts), receipts (write JSONL receipts), or audit (receipt lookup)",
    )

    parser.add_argument(
        "--input",
        type=Path,
        help="Puzzle input file (default: standard input)",
    )

    parser.add_argument(
        "--out",
        type=Path,
        help="Output path for receipts JSONL file (receipts mode)",
    )

    parser.add_argument(
        "--receipts",
        type=Path,
        help="Receipts JSONL to read (audit mode)",
    )

    parser.add_argument(
        "--index",
        type=int,
        help="Entry index to audit (audit mode)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point with argparse."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(message)s",
    )

    if args.mode == "audit":
        if args.receipts is None or args.index is None:
            parser.error("audit mode requires --receipts and --index")
        run_audit(entry_index=args.index, receipts_path=args.receipts)
        return

    if args.mode == "receipts" and args.out is None:
        parser.error("receipts mode requires --out")

    try:
        entries = load_entries_from(args.input)

        if args.mode == "answers":
            run_answers(entries)
        elif args.mode == "receipts":
            run_receipts(entries, out_path=args.out)
    except DecodeError as e:
        logging.error(f"Error: {e}")
        raise SystemExit(exit_code_for(e))


if __name__ == "__main__":
    main()
