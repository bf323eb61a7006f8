# grc_ai/prompts/vendor.py

"""
Third-party and vendor risk prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

VENDOR_PERSONA = "You are an expert third-party risk management professional."

vendor_info = info_block("Vendor Information", title_label="Vendor", type_label="Service Type", scope_label="Engagement Scope")

VENDOR_SECTIONS = {
    ContentType.VENDOR_ASSESSMENT: (
        "assessment",
        "Assess the inherent risk of the engagement across security, privacy, financial, operational and compliance domains",
        "Conclude with an overall risk rating and recommended next steps",
    ),
    ContentType.VENDOR_DUE_DILIGENCE_REPORT: (
        "due diligence report",
        "Summarize ownership, financial health, certifications, security posture and references",
        "Highlight red flags that need follow-up before contracting",
    ),
    ContentType.VENDOR_CONTRACT_RISK_ANALYSIS: (
        "contract risk analysis",
        "Review liability caps, indemnities, data protection, audit rights, termination and exit clauses",
        "Recommend contract language for each gap",
    ),
    ContentType.VENDOR_RISK_SCORING: (
        "risk scoring",
        "Score each risk domain on a 1-5 scale with a short justification",
        "Compute and explain the weighted overall score",
    ),
    ContentType.VENDOR_ASSESSMENT_CRITERIA: (
        "assessment criteria",
        "Define assessment criteria grouped by risk domain",
        "Weight each criterion and describe the evidence expected",
    ),
    ContentType.VENDOR_MONITORING_PLAN: (
        "monitoring plan",
        "Define monitoring activities and their frequency based on vendor criticality",
        "List the KPIs, KRIs and triggers for reassessment",
    ),
    ContentType.VENDOR_INCIDENT_RESPONSE: (
        "incident response procedure",
        "Describe how vendor-caused incidents are reported, escalated and resolved",
        "Include notification timelines required from the vendor",
    ),
    ContentType.VENDOR_PERFORMANCE_EVALUATION: (
        "performance evaluation",
        "Evaluate service quality against SLAs and contractual commitments",
        "Recommend improvement actions or remediation",
    ),
    ContentType.VENDOR_COMPLIANCE_ASSESSMENT: (
        "compliance assessment",
        "Assess the vendor against $framework and applicable regulations",
        "List non-compliances and required corrective actions",
    ),
    ContentType.VENDOR_FINANCIAL_ANALYSIS: (
        "financial analysis",
        "Assess liquidity, profitability, leverage and concentration risk",
        "Flag indicators of financial distress",
    ),
    ContentType.VENDOR_SECURITY_ASSESSMENT: (
        "security assessment",
        "Assess access control, encryption, vulnerability management, incident response and certifications",
        "Rate the residual security risk",
    ),
    ContentType.VENDOR_OPERATIONAL_ASSESSMENT: (
        "operational assessment",
        "Assess capacity, resilience, subcontractor dependencies and service continuity",
        "Identify single points of failure",
    ),
}

for content_type, (what, *requirements) in VENDOR_SECTIONS.items():
    register(content_type, PromptRule(
        persona=VENDOR_PERSONA,
        task=f'Generate a vendor {what} for "$title"',
        blocks=(vendor_info,),
        requirements=tuple(requirements) + (
            "Make it specific to the vendor and the services provided",
            "Use professional third-party risk terminology",
        ),
        output=ONLY_TEXT.format(what=what),
        subject="the vendor",
    ))
