from __future__ import annotations

from typing import Dict, List, Optional, TextIO

from .core import Report, StepStatus


# ------------------------
# Row building helpers
# ------------------------

# Each row is a dict; possible keys:
#   key, status, reason, failed

STATUS_LABELS = {
    StepStatus.SUCCESS: "OK",
    StepStatus.FAILURE: "FAILED",
    StepStatus.IGNORED: "IGNORED FAILURE",
    StepStatus.SKIPPED: "SKIPPED",
}


def build_rows(report: Report) -> List[Dict[str, str]]:
    """
    Build a list of dict rows, one per report entry, in report order.

    Keys:
      - key:      step display key
      - status:   OK | FAILED | IGNORED FAILURE | SKIPPED
      - reason:   skip reason, if any
      - failed:   "True"/"False"
    """
    rows: List[Dict[str, str]] = []
    for key, result in report.data():
        rows.append({
            "key": key,
            "status": STATUS_LABELS[result.status],
            "reason": result.reason or "",
            "failed": str(result.failed),
        })
    return rows


def exit_code(report: Report) -> int:
    """Process exit status for a finished run: ``1`` if any step failed."""
    return 1 if report.failed else 0


# ------------------------
# Printing
# ------------------------

# Map column keys → human-friendly header labels
COLUMN_HEADERS = {
    "key": "Step",
    "status": "Status",
    "reason": "Reason",
    "failed": "Failed",
}

DEFAULT_COLUMNS = ["key", "status", "reason"]


def print_table(rows: List[Dict[str, str]], cols_to_show: List[str], *, file: Optional[TextIO] = None) -> None:
    if not rows:
        print("No steps recorded.", file=file)
        print(file=file)
        return

    # Only use supported keys
    cols = [c for c in cols_to_show if c in COLUMN_HEADERS]
    if not cols:
        print("No columns selected to display (cols_to_show was empty).", file=file)
        print(file=file)
        return

    projected_rows = [
        {k: (row.get(k, "") or "") for k in cols}
        for row in rows
    ]

    headers = [COLUMN_HEADERS[k] for k in cols]
    all_rows_for_width = [headers] + [
        [r[k] for k in cols] for r in projected_rows
    ]

    col_widths = [
        max(len(str(row[i])) for row in all_rows_for_width)
        for i in range(len(cols))
    ]

    def fmt_vals(values: List[str]) -> str:
        return "  ".join(
            str(values[i]).ljust(col_widths[i])
            for i in range(len(cols))
        ).rstrip()

    print(fmt_vals(headers), file=file)
    print("  ".join("-" * w for w in col_widths), file=file)

    for r in projected_rows:
        print(fmt_vals([r[k] for k in cols]), file=file)

    print(file=file)


def print_summary(report: Report, *, file: Optional[TextIO] = None) -> None:
    """Print the end-of-run summary: one line per step, then the verdict."""
    rows = build_rows(report)
    cols = list(DEFAULT_COLUMNS)
    if not any(r["reason"] for r in rows):
        cols.remove("reason")

    print("Summary", file=file)
    print(file=file)
    print_table(rows, cols, file=file)

    counts = {status: sum(1 for _ in report.iter_entries(status=status)) for status in StepStatus}
    print(
        f"{counts[StepStatus.SUCCESS]} succeeded, {counts[StepStatus.FAILURE]} failed, "
        f"{counts[StepStatus.IGNORED]} ignored, {counts[StepStatus.SKIPPED]} skipped",
        file=file,
    )
