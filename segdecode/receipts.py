"""
Entry Receipts + Writer

One JSON object per line, one line per decoded entry: the samples and
outputs as read, the wiring found, the digits and the output value.

The decoder is built a second time from the same samples; the two wiring
hashes must agree (pass_idempotent).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from segdecode.decoder import Decoder
from segdecode.puzzle import EntrySolution
from segdecode.segments import reference_table_hash


def build_entry_receipt(solution: EntrySolution, entry_index: int) -> Dict[str, Any]:
    """
    Build the receipt dict for a single solved entry.

    Args:
        solution: Solved entry (decoder, digits, value)
        entry_index: Index of the entry within the input (0, 1, 2, ...)

    Returns:
        JSON-serializable receipt dict
    """
    entry = solution.entry

    # Rebuild from the same samples to check idempotence
    rebuilt = Decoder.build(entry.samples)
    sha256_mapping = solution.decoder.mapping_hash()
    sha256_mapping_again = rebuilt.mapping_hash()

    return {
        "entry_index": entry_index,
        "line_number": entry.line_number,
        "samples": [str(s) for s in entry.samples],
        "outputs": [str(o) for o in entry.outputs],
        "digits": list(solution.digits),
        "value": solution.value,
        "easy_count": solution.easy_count,
        "mapping": dict(sorted(solution.decoder.mapping.items())),
        "samples_consumed": solution.decoder.samples_consumed,
        "mapping_sha256": sha256_mapping,
        "mapping_sha256_again": sha256_mapping_again,
        "pass_idempotent": sha256_mapping == sha256_mapping_again,
        "reference_sha256": reference_table_hash(),
    }


class ReceiptWriter:
    """Context manager that writes entry receipts to a JSONL file, one per line."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_handle = None

    def __enter__(self):
        self.file_handle = open(self.output_path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.file_handle:
            self.file_handle.close()

    def write(self, receipt: Dict[str, Any]):
        """Write a single receipt as a JSON line."""
        if not self.file_handle:
            raise RuntimeError("ReceiptWriter not opened (use context manager)")

        self.file_handle.write(json.dumps(receipt, sort_keys=True, ensure_ascii=False))
        self.file_handle.write('\n')
        self.file_handle.flush()


def write_jsonl(out_path: Path, receipts: Iterable[Dict[str, Any]]) -> int:
    """Write all receipts to out_path; returns how many were written."""
    count = 0
    with ReceiptWriter(out_path) as writer:
        for receipt in receipts:
            writer.write(receipt)
            count += 1
    return count


def read_receipts(receipts_path: Path) -> List[Dict[str, Any]]:
    """
    Load every entry receipt from a JSONL file, skipping blank lines.

    Args:
        receipts_path: File written by write_jsonl

    Returns:
        Receipt dicts in file order
    """
    receipts = []
    with open(receipts_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                receipts.append(json.loads(line))
    return receipts


def find_receipt(receipts_path: Path, entry_index: int) -> Optional[Dict[str, Any]]:
    """
    Find one entry's receipt.

    Args:
        receipts_path: Path to receipts.jsonl
        entry_index: Index of the entry within the input

    Returns:
        Receipt dict if found, None otherwise
    """
    for receipt in read_receipts(receipts_path):
        if receipt.get("entry_index") == entry_index:
            return receipt
    return None
