# grc_ai/prompts/security.py

"""
IT security policy and assessment prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

SECURITY_PERSONA = "You are an expert information security officer (CISSP, CISM)."

security_info = info_block("Security Context", type_label="Policy Type", scope_label="Scope")


def _security_rule(task, what, *requirements):
    return PromptRule(
        persona=SECURITY_PERSONA,
        task=task,
        blocks=(security_info,),
        requirements=requirements + ("Align with $framework where applicable",),
        output=ONLY_TEXT.format(what=what),
        subject="the security policy",
    )


register(ContentType.SECURITY_POLICY, _security_rule(
    'Generate an information security policy for "$title"', "policy",
    "Cover governance, asset management, access control, cryptography, operations security and incident management",
    "Use enforceable language (must, shall)",
    "Keep it between 400-800 words",
))

register(ContentType.VULNERABILITY_ASSESSMENT_REPORT, _security_rule(
    'Generate a vulnerability assessment report for "$title"', "report",
    "Summarize the assessment approach and tools",
    "Group findings by severity (Critical, High, Medium, Low)",
    "Provide remediation guidance and target timelines for each severity",
))

register(ContentType.SECURITY_INCIDENT_RESPONSE_PLAN, _security_rule(
    'Generate a security incident response plan for "$title"', "plan",
    "Define incident classification and severity levels",
    "Describe detection, triage, containment, eradication, recovery and post-incident review",
    "Assign the roles of the incident response team",
))

register(ContentType.SECURITY_CONTROLS_MAPPING, _security_rule(
    'Map the security controls for "$title"', "mapping",
    "Map each control to the relevant clauses of $framework",
    "Identify controls that satisfy more than one requirement",
    "Flag requirements that have no mapped control",
))

register(ContentType.SECURITY_FRAMEWORK_COMPLIANCE, _security_rule(
    'Generate a framework compliance assessment for "$title"', "assessment",
    "Assess the maturity of each control domain of $framework",
    "List gaps with a prioritized remediation roadmap",
))

register(ContentType.SECURITY_POLICY_DESCRIPTION, _security_rule(
    'Generate a description for the security policy "$title"', "description",
    "Explain the objective of the policy and the risks it addresses",
    "Keep it between 80-200 words",
))

register(ContentType.SECURITY_POLICY_SCOPE, _security_rule(
    'Generate the scope of the security policy "$title"', "scope",
    "Define the users, systems, data and locations covered",
    "State exclusions",
))

register(ContentType.SECURITY_POLICY_PROCEDURES, _security_rule(
    'Generate the procedures supporting the security policy "$title"', "procedures",
    "Write step-by-step procedures that implement the policy statements",
    "Name the role responsible for each step",
))

register(ContentType.SECURITY_POLICY_ROLES, _security_rule(
    'Define the roles and responsibilities for the security policy "$title"', "roles and responsibilities",
    "Cover the board, CISO, system owners, IT operations and all users",
    "Use a clear responsibility statement per role",
))

register(ContentType.SECURITY_POLICY_INCIDENT_RESPONSE, _security_rule(
    'Generate the incident response section of the security policy "$title"', "incident response section",
    "State reporting obligations and timelines for all staff",
    "Reference the incident response plan and escalation contacts",
))

register(ContentType.SECURITY_POLICY_ACCESS_CONTROL, _security_rule(
    'Generate the access control section of the security policy "$title"', "access control section",
    "Cover least privilege, joiner-mover-leaver, privileged access, MFA and periodic access reviews",
))

register(ContentType.SECURITY_POLICY_DATA_PROTECTION, _security_rule(
    'Generate the data protection section of the security policy "$title"', "data protection section",
    "Cover data classification, encryption at rest and in transit, retention and secure disposal",
    "Reference privacy obligations where personal data is involved",
))
