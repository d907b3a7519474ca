"""Report generators for registry issues."""
from __future__ import annotations

import csv
import io
from html import escape
from typing import Sequence

from token_checker.domain.models import Issue
from token_checker.domain.results import ValidationReport

FIELDNAMES = ["kind", "line", "symbol", "mint", "message", "related_line", "offenders"]


def issues_to_rows(issues: Sequence[Issue]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in issues:
        record = item.record
        rows.append(
            {
                "kind": item.kind.value,
                "line": "" if item.line is None else str(item.line),
                "symbol": record.symbol if record else "",
                "mint": record.mint if record else "",
                "message": item.message,
                "related_line": str(item.related.line) if item.related else "",
                "offenders": ";".join(r.mint for r in item.records),
            }
        )
    return rows


def render_csv(issues: Sequence[Issue]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FIELDNAMES)
    writer.writeheader()
    writer.writerows(issues_to_rows(issues))
    return buffer.getvalue().encode("utf-8")


def render_text(report: ValidationReport) -> str:
    summary = report.summary
    lines = [
        "Validation Summary",
        "==================",
        f"Previous records: {summary.total_previous}",
        f"Current records: {summary.total_current}",
    ]
    for kind, count in summary.counts.items():
        lines.append(f"{kind.value}: {count}")
    lines.append(f"Total errors: {summary.total_errors}")

    issues = tuple(report.iter_all_issues())
    if issues:
        lines.append("")
        lines.append("Issues detected:")
        for row in issues_to_rows(issues):
            where = f"line {row['line']}" if row["line"] else "snapshot"
            lines.append(f"- {row['kind']} at {where}: {row['message']}")
    elif not report.has_issues():
        lines.append("")
        lines.append("No issues detected.")
    return "\n".join(lines)


def render_html(report: ValidationReport) -> str:
    rows = issues_to_rows(tuple(report.iter_all_issues()))
    if not rows:
        return "<p>No issues detected.</p>"
    header = "".join(f"<th>{col}</th>" for col in FIELDNAMES)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{escape(row[col])}</td>" for col in FIELDNAMES) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
