"""
Tests for the markdown report helpers.
"""

from grc_ai.orchestrator import AIOrchestrator
from grc_ai.reporting import (
    generate_compliance_matrix,
    generate_executive_summary,
    generate_metrics_dashboard,
    generate_report_structure,
    generate_risk_heatmap,
)


def test_report_structure():
    report = generate_report_structure("Q3 Access Review", ["Executive Summary", "Findings"])

    assert report.startswith("# Q3 Access Review\n\n## Table of Contents")
    assert "1. [Executive Summary](#executive-summary)" in report
    assert "2. [Findings](#findings)" in report
    assert report.count("_Content to be added._") == 2


def test_executive_summary():
    summary = generate_executive_summary(["Stale admin accounts"], ["Quarterly access recertification"])

    assert "- Stale admin accounts" in summary
    assert "1. Quarterly access recertification" in summary


def test_executive_summary_without_items():
    summary = generate_executive_summary([], [])

    assert "- No significant findings." in summary
    assert "No recommendations at this time." in summary


def test_metrics_dashboard():
    table = generate_metrics_dashboard([
        {'name': "Patch latency (days)", 'value': 12, 'target': 14, 'status': "good"},
        {'name': "Open findings", 'value': 9, 'status': "critical"},
    ])

    assert "| Patch latency (days) | 12 | 14 | 🟢 good |" in table
    assert "| Open findings | 9 | - | 🔴 critical |" in table


def test_compliance_matrix_rate():
    table = generate_compliance_matrix([
        {'control': "AC-1", 'status': "compliant", 'evidence': "Policy v3"},
        {'control': "AC-2", 'status': "partial"},
        {'control': "AC-3", 'status': "non-compliant"},
        {'control': "AC-4", 'status': "compliant"},
    ])

    assert "| AC-1 | ✅ compliant | Policy v3 |" in table
    assert table.endswith("**Overall compliance:** 62.5%")


def test_compliance_matrix_empty():
    assert "Overall compliance" not in generate_compliance_matrix([])


def test_risk_heatmap():
    heatmap = generate_risk_heatmap([
        {'category': "Ransomware", 'likelihood': 4, 'impact': 5, 'level': "critical"},
        {'category': "Phishing", 'likelihood': 4, 'impact': 5, 'level': "high"},
        {'category': "Vendor outage", 'likelihood': 9, 'impact': 0, 'level': "medium"},
    ])

    assert "| 4 |  |  |  |  | Ransomware, Phishing |" in heatmap
    assert "| 5 | Vendor outage |  |  |  |  |" in heatmap
    assert "- Critical: 1\n- High: 1\n- Medium: 1\n- Low: 0" in heatmap


def test_helpers_exposed_on_orchestrator():
    assert AIOrchestrator.generate_risk_heatmap([]).startswith("## Risk Heatmap")
