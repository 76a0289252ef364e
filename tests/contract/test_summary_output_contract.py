from __future__ import annotations

import re

"""SUMMARY line format contract: scripts grep the last line of a run."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)\s+reports=([0-9]+)\s+no_data=([0-9]+)\s+failed=([0-9]+)\s+"
    r"findings=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=3 reports=2 no_data=0 failed=1 findings=7 elapsed_sec=0.84"
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"

