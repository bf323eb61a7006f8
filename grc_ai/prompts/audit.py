# grc_ai/prompts/audit.py

"""
Audit planning and reporting prompts, plus the generic GRC fallback rule.
"""

from ..base.models import ContextFields, GenerationRequest
from ..content_types import AuditType, ContentType
from .base import ONLY_TEXT, PromptRule, register

AUDIT_PERSONA = "You are an expert audit professional."

AUDIT_TYPE_GUIDANCE = {
    AuditType.INTERNAL.value: (
        "Focus on internal controls, governance, and operational efficiency",
        "Review compliance with internal policies and procedures",
        "Assess risk management processes and control environment",
        "Evaluate operational effectiveness and efficiency",
        "Review management oversight and reporting mechanisms",
    ),
    AuditType.EXTERNAL.value: (
        "Focus on external relationships and third-party risk management",
        "Review vendor management and contract compliance",
        "Assess external regulatory compliance",
        "Evaluate customer-facing processes and controls",
        "Review external reporting and communication controls",
    ),
    AuditType.COMPLIANCE.value: (
        "Focus on adherence to laws, regulations, and industry standards",
        "Review compliance monitoring and reporting systems",
        "Assess training and awareness programs",
        "Evaluate compliance testing and validation processes",
        "Review incident management and corrective action procedures",
    ),
    AuditType.OPERATIONAL.value: (
        "Focus on business process efficiency and effectiveness",
        "Review operational controls and performance metrics",
        "Assess resource utilization and cost management",
        "Evaluate process automation and technology usage",
        "Review operational risk management and business continuity",
    ),
    AuditType.FINANCIAL.value: (
        "Focus on financial reporting accuracy and completeness",
        "Review internal controls over financial reporting (ICFR)",
        "Assess revenue recognition and expense management",
        "Evaluate financial close processes and reconciliations",
        "Review cash management and treasury functions",
    ),
    AuditType.IT.value: (
        "Focus on IT governance, security, and infrastructure",
        "Review system access controls and user management",
        "Assess data integrity and backup/recovery procedures",
        "Evaluate cybersecurity controls and incident response",
        "Review IT project management and change controls",
    ),
    AuditType.QUALITY.value: (
        "Focus on quality management systems and standards",
        "Review product/service quality controls and testing",
        "Assess customer satisfaction and complaint handling",
        "Evaluate quality assurance and continuous improvement",
        "Review supplier quality and inspection processes",
    ),
    AuditType.ENVIRONMENTAL.value: (
        "Focus on environmental compliance and sustainability",
        "Review environmental management systems and reporting",
        "Assess waste management and pollution control",
        "Evaluate energy efficiency and resource conservation",
        "Review environmental risk assessment and mitigation",
    ),
}

DEFAULT_GUIDANCE = (
    "Focus on relevant controls and compliance requirements",
    "Review applicable policies, procedures, and standards",
    "Assess operational effectiveness and risk management",
    "Evaluate monitoring and reporting mechanisms",
    "Review continuous improvement and corrective actions",
)


def audit_type_guidance(audit_type: str) -> str:
    """Focus-area bullets for an audit type; unknown types get the default block."""
    bullets = AUDIT_TYPE_GUIDANCE.get((audit_type or "").lower(), DEFAULT_GUIDANCE)
    return "\n".join(f"- {b}" for b in bullets)


def _objectives_guidance(request: GenerationRequest) -> str:
    audit_type = (request.fields or ContextFields()).type or AuditType.INTERNAL.value
    return "Audit Type Specific Focus Areas:\n" + audit_type_guidance(audit_type)


register(ContentType.DESCRIPTION, PromptRule(
    persona=AUDIT_PERSONA,
    task="Generate a comprehensive audit description",
    requirements=(
        "Create a detailed, professional audit description",
        'Ensure the description is specifically relevant to "$title"',
        "Include the purpose, scope overview, and key focus areas",
        "Use professional audit terminology",
        "Keep it between 100-300 words",
        "Make it specific to the audit type and business unit",
    ),
    output=ONLY_TEXT.format(what="description"),
))

register(ContentType.OBJECTIVES, PromptRule(
    persona="You are an expert audit professional with extensive experience in $audit_type audits.",
    task='Generate specific, realistic audit objectives for "$title"',
    sections=(_objectives_guidance,),
    requirements=(
        "Create 4-6 specific, measurable audit objectives",
        'Each objective must be directly related to "$title" and $audit_type audit type',
        "Objectives should be realistic, achievable, and follow professional audit standards",
        "Use action-oriented language (assess, evaluate, review, verify, test, examine, analyze, etc.)",
        "Include both compliance and operational effectiveness objectives",
        "Consider risk-based audit approach",
        "Make them specific to the business unit: $business_unit",
        "Each objective should be a complete, professional statement",
        "Focus on what auditors would realistically examine for this specific audit",
    ),
    output=(
        "Format: Return only the objectives as a clean JSON array of strings, no additional text or formatting.\n"
        'Example: ["Assess the effectiveness of internal controls over financial reporting processes", '
        '"Evaluate compliance with regulatory requirements for data privacy", '
        '"Review the adequacy of risk management frameworks"]'
    ),
))

register(ContentType.SCOPE, PromptRule(
    persona=AUDIT_PERSONA,
    task="Generate a detailed audit scope",
    requirements=(
        "Define what will be included and excluded in the audit",
        'Be specific to "$title" and the business unit',
        "Include relevant systems, processes, locations, and time periods",
        "Mention key stakeholders and departments involved",
        "Keep it comprehensive but focused",
        "Use professional audit language",
    ),
    output=ONLY_TEXT.format(what="scope"),
))

register(ContentType.METHODOLOGY, PromptRule(
    persona=AUDIT_PERSONA,
    task="Generate a comprehensive audit methodology",
    requirements=(
        "Describe the audit approach and techniques to be used",
        'Include specific methods relevant to "$title"',
        "Mention risk assessment, testing procedures, and evaluation criteria",
        "Include data collection methods and sampling techniques",
        "Reference relevant standards or frameworks if applicable",
        "Be specific to the audit type and business unit",
        "Keep it detailed but practical",
    ),
    output=ONLY_TEXT.format(what="methodology"),
))

register(ContentType.EXECUTIVE_SUMMARY, PromptRule(
    persona="You are an expert audit professional with extensive experience in writing executive summaries for audit reports.",
    task="Generate a comprehensive executive summary for the following audit",
    requirements=(
        "Write a professional executive summary suitable for senior management and audit committees",
        "Start with a brief overview of the audit's purpose and scope",
        "Summarize key findings, observations, and conclusions",
        "Highlight any significant risks or control weaknesses identified",
        "Include recommendations for improvement where applicable",
        "Mention the overall audit opinion or assessment",
        "Keep it concise but comprehensive (150-300 words)",
        "Use professional audit terminology and business language",
        "Structure it with clear paragraphs covering: purpose, scope, methodology, key findings, conclusions, and recommendations",
        "Make it specific to the audit title, type, and business unit provided",
    ),
    output="Write only the executive summary content, no additional formatting, headers, or explanations.",
))

GENERIC_RULE = PromptRule(
    persona="You are an expert in governance, risk, and compliance (GRC) content generation.",
    task="Generate comprehensive content",
    requirements=(
        'Create detailed, professional content relevant to "$title"',
        "Ensure the content is specifically tailored to the GRC context and requirements",
        "Use professional terminology appropriate to the field",
        "Keep it between 200-400 words",
        "Make it specific to the business unit and context provided",
        "Include actionable insights and recommendations where applicable",
    ),
    subject="the topic",
)
