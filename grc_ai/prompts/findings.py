# grc_ai/prompts/findings.py

"""
Audit finding prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

FINDING_PERSONA = "You are an expert internal auditor experienced in writing audit findings."

finding_info = info_block("Finding Information", title_label="Finding", type_label="Finding Type", scope_label="Audit Area")

FINDING_SECTIONS = {
    ContentType.FINDING_DESCRIPTION: ("description", "Describe the condition observed and the criteria it breaches"),
    ContentType.FINDING_ANALYSIS: ("analysis", "Analyze the condition, criteria, cause and effect of the finding"),
    ContentType.FINDING_IMPACT: ("impact statement", "Explain the financial, operational, regulatory and reputational impact"),
    ContentType.FINDING_RECOMMENDATIONS: ("recommendations", "Recommend specific, practical actions that address the root cause"),
    ContentType.FINDING_ACTION_PLAN: ("action plan", "List remediation actions with owners, milestones and target dates"),
    ContentType.FINDING_RISK_ASSESSMENT: ("risk assessment", "Rate the finding by likelihood and impact and justify the overall rating"),
    ContentType.FINDING_ROOT_CAUSE: ("root cause analysis", "Identify the underlying root cause using a technique such as 5 Whys"),
    ContentType.FINDING_EVIDENCE: ("evidence summary", "Describe the evidence that supports the finding and how it was obtained"),
    ContentType.FINDING_PRIORITY: ("priority rating", "Assign a priority (Critical, High, Medium, Low) and justify it"),
    ContentType.FINDING_TIMELINE: ("remediation timeline", "Propose a realistic remediation timeline based on the priority"),
    ContentType.FINDING_ASSIGNEE: ("ownership recommendation", "Recommend the role that should own remediation and explain why"),
    ContentType.FINDING_FOLLOW_UP: ("follow-up plan", "Describe how and when the auditor will verify the remediation"),
}

for content_type, (what, focus) in FINDING_SECTIONS.items():
    register(content_type, PromptRule(
        persona=FINDING_PERSONA,
        task=f'Generate the finding {what} for "$title"',
        blocks=(finding_info,),
        requirements=(
            focus,
            "Be factual, concise and objective",
            "Make it specific to $business_unit",
            "Keep it between 80-250 words",
        ),
        output=ONLY_TEXT.format(what=what),
        subject="the finding",
    ))
