# grc_ai/reporting.py

"""
Markdown builders for report sections.

These format data the caller already has; they never call a backend.
"""

from typing import Dict, List, Optional, Sequence

STATUS_ICONS = {
    'good': "🟢",
    'warning': "🟡",
    'critical': "🔴",
}

COMPLIANCE_ICONS = {
    'compliant': "✅",
    'partial': "⚠️",
    'non-compliant': "❌",
}

RISK_LEVEL_ORDER = ('critical', 'high', 'medium', 'low')


def _cell(value) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def generate_report_structure(title: str, sections: Sequence[str]) -> str:
    """Report skeleton with a table of contents and one heading per section."""
    lines = [f"# {title}", "", "## Table of Contents", ""]
    for index, section in enumerate(sections, 1):
        anchor = section.lower().replace(" ", "-")
        lines.append(f"{index}. [{section}](#{anchor})")
    for section in sections:
        lines.extend(["", f"## {section}", "", "_Content to be added._"])
    return "\n".join(lines)


def generate_executive_summary(key_findings: Sequence[str], recommendations: Sequence[str]) -> str:
    lines = ["## Executive Summary", "", "### Key Findings", ""]
    if key_findings:
        lines.extend(f"- {f}" for f in key_findings)
    else:
        lines.append("- No significant findings.")
    lines.extend(["", "### Recommendations", ""])
    if recommendations:
        lines.extend(f"{i}. {r}" for i, r in enumerate(recommendations, 1))
    else:
        lines.append("No recommendations at this time.")
    return "\n".join(lines)


def generate_metrics_dashboard(metrics: List[Dict]) -> str:
    """
    Metrics table.

    Each metric is a mapping with ``name``, ``value``, ``status``
    (good | warning | critical) and an optional ``target``.
    """
    lines = [
        "## Metrics Dashboard",
        "",
        "| Metric | Value | Target | Status |",
        "|---|---|---|---|",
    ]
    for metric in metrics:
        target: Optional[float] = metric.get('target')
        status = metric.get('status', 'good')
        lines.append(
            f"| {_cell(metric['name'])} | {metric['value']} | "
            f"{'-' if target is None else target} | {STATUS_ICONS.get(status, '')} {status} |"
        )
    return "\n".join(lines)


def generate_compliance_matrix(requirements: List[Dict]) -> str:
    """Compliance table plus an overall compliance rate (partial counts as half)."""
    lines = [
        "## Compliance Matrix",
        "",
        "| Control | Status | Evidence |",
        "|---|---|---|",
    ]
    score = 0.0
    for requirement in requirements:
        status = requirement.get('status', 'non-compliant')
        if status == 'compliant':
            score += 1
        elif status == 'partial':
            score += 0.5
        lines.append(
            f"| {_cell(requirement['control'])} | {COMPLIANCE_ICONS.get(status, '')} {status} | "
            f"{_cell(requirement.get('evidence', ''))} |"
        )
    if requirements:
        rate = score / len(requirements) * 100
        lines.extend(["", f"**Overall compliance:** {rate:.1f}%"])
    return "\n".join(lines)


def generate_risk_heatmap(risks: List[Dict]) -> str:
    """
    Likelihood x impact grid (1-5 each) listing risk categories per cell,
    followed by a count per risk level.
    """
    grid: Dict[tuple, List[str]] = {}
    for risk in risks:
        likelihood = min(max(int(risk['likelihood']), 1), 5)
        impact = min(max(int(risk['impact']), 1), 5)
        grid.setdefault((likelihood, impact), []).append(str(risk['category']))

    lines = [
        "## Risk Heatmap",
        "",
        "| Likelihood \\ Impact | 1 | 2 | 3 | 4 | 5 |",
        "|---|---|---|---|---|---|",
    ]
    for likelihood in range(5, 0, -1):
        cells = [_cell(", ".join(grid.get((likelihood, impact), []))) for impact in range(1, 6)]
        lines.append(f"| {likelihood} | " + " | ".join(cells) + " |")

    counts = {level: 0 for level in RISK_LEVEL_ORDER}
    for risk in risks:
        level = risk.get('level', 'low')
        counts[level] = counts.get(level, 0) + 1
    lines.extend(["", "### Risk Distribution", ""])
    lines.extend(f"- {level.title()}: {counts[level]}" for level in RISK_LEVEL_ORDER)
    return "\n".join(lines)
