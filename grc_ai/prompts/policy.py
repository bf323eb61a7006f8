# grc_ai/prompts/policy.py

"""
Policy management, incident response and ESG prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

POLICY_PERSONA = "You are an expert policy writer specializing in governance, risk, and compliance."

policy_info = info_block("Policy Information", type_label="Policy Type", scope_label="Scope")

register(ContentType.POLICY_CONTENT, PromptRule(
    persona=POLICY_PERSONA,
    task='Generate the full content of the policy "$title"',
    blocks=(policy_info,),
    requirements=(
        "Structure the policy with Purpose, Scope, Policy Statements, Roles and Responsibilities, Compliance and Review sections",
        "Use clear, enforceable language (must, shall, should)",
        "Align the policy statements with $framework where relevant",
        "Make it specific to $business_unit",
        "Keep it between 400-800 words",
    ),
    output=ONLY_TEXT.format(what="policy"),
    subject="the policy",
))

register(ContentType.POLICY_TITLE, PromptRule(
    persona=POLICY_PERSONA,
    task="Suggest a concise, professional policy title",
    blocks=(policy_info,),
    requirements=(
        "Return a single title of no more than 10 words",
        "Make the subject of the policy obvious from the title",
        "Do not wrap the title in quotes",
    ),
    output=ONLY_TEXT.format(what="title"),
    subject="the policy",
))

register(ContentType.POLICY_DESCRIPTION, PromptRule(
    persona=POLICY_PERSONA,
    task='Generate a description for the policy "$title"',
    blocks=(policy_info,),
    requirements=(
        "Summarize what the policy covers and why it exists",
        "Mention who the policy applies to",
        "Keep it between 80-200 words",
    ),
    output=ONLY_TEXT.format(what="description"),
    subject="the policy",
))

register(ContentType.POLICY_SCOPE, PromptRule(
    persona=POLICY_PERSONA,
    task='Generate the scope statement for the policy "$title"',
    blocks=(policy_info,),
    requirements=(
        "Define the people, systems, locations and activities covered",
        "State any explicit exclusions",
        "Keep it between 60-150 words",
    ),
    output=ONLY_TEXT.format(what="scope"),
    subject="the policy",
))

register(ContentType.POLICY_VERSION_SUMMARY, PromptRule(
    persona=POLICY_PERSONA,
    task='Generate a version change summary for the policy "$title"',
    blocks=(policy_info,),
    requirements=(
        "Summarize what changed compared with the previous version",
        "Highlight changes that affect employee obligations",
        "List the reason for each significant change",
        "Keep it under 150 words",
    ),
    output=ONLY_TEXT.format(what="summary"),
    subject="the policy",
))

register(ContentType.POLICY_TEMPLATE, PromptRule(
    persona=POLICY_PERSONA,
    task='Generate a reusable policy template for "$title"',
    blocks=(policy_info,),
    requirements=(
        "Provide the standard section headings of a corporate policy",
        "Under each heading, add guidance on what the section should contain",
        "Use [PLACEHOLDER] markers for organization-specific values",
        "Align the template with $framework where relevant",
    ),
    output=ONLY_TEXT.format(what="template"),
    subject="the policy",
))

register(ContentType.INCIDENT_RESPONSE, PromptRule(
    persona="You are an expert incident response manager.",
    task='Generate an incident response procedure for "$title"',
    blocks=(info_block("Incident Information", type_label="Incident Type", scope_label="Affected Scope"),),
    requirements=(
        "Cover the preparation, detection, containment, eradication, recovery and lessons learned phases",
        "Assign roles and escalation paths for each phase",
        "Include notification obligations to regulators and affected parties",
        "Keep each step short and actionable",
    ),
    output=ONLY_TEXT.format(what="procedure"),
    subject="the incident",
))

register(ContentType.ESG_PROGRAM, PromptRule(
    persona="You are an expert in environmental, social, and governance (ESG) program design.",
    task='Generate an ESG program outline for "$title"',
    blocks=(info_block("Program Information", type_label="Program Type", scope_label="Scope"),),
    requirements=(
        "Define objectives for the environmental, social and governance pillars",
        "Propose measurable KPIs for each pillar",
        "Reference recognized reporting standards (GRI, SASB, TCFD) where relevant",
        "Consider the expectations of the $industry industry",
        "Include governance and reporting cadence",
    ),
    output=ONLY_TEXT.format(what="program"),
    subject="the organization",
))
