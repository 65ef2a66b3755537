"""
Seven-Segment Signal Decoder
Resolves scrambled seven-segment display wiring by constraint propagation.

Modules:
- segments: segment sets + the fixed digit reference table
- mapping: divergent mapping (candidate matrix) and its reduction
- decoder: decoder builder + decoder
- entries: puzzle input parsing
- puzzle: part 1 / part 2 answers
- receipts: JSONL receipt writer
- solve: command-line harness
"""

__version__ = "0.1.0"
