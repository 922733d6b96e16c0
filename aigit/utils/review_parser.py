"""
Severity classification of review output.

Reviews come back as free text with HIGH/MEDIUM/LOW (or 高/中/低) tags.
Lines are classified for colouring, and the hook uses the same rules to
decide whether to block a commit.
"""

from typing import Optional


OK_MARKERS = ("NO CRITICAL", "NO ISSUE", "未发现", "NO SIGNIFICANT", "LOOKS GOOD", "NO PROBLEM")
HIGH_MARKERS = ("HIGH", "高严重性", "高", "CRITICAL", "严重", "SECURITY", "安全漏洞", "VULNERABILITY", "漏洞")
MEDIUM_MARKERS = ("MEDIUM", "中严重性", "中", "WARN")
LOW_MARKERS = ("LOW", "低", "非严重问题", "INFO")


def _contains_any(text: str, markers) -> bool:
    return any(marker in text for marker in markers)


def classify_line(line: str) -> Optional[str]:
    """Return "high", "medium", "low", "ok" or None for a single review line."""
    upper = line.upper()

    if _contains_any(upper, OK_MARKERS):
        return "ok"
    if _contains_any(upper, HIGH_MARKERS):
        return "high"
    if _contains_any(upper, MEDIUM_MARKERS):
        return "medium"
    if _contains_any(upper, LOW_MARKERS):
        return "low"
    return None


def has_high_severity_issues(result: str) -> bool:
    """True when any line of the review reports a high-severity issue."""
    return any(classify_line(line) == "high" for line in result.splitlines())
