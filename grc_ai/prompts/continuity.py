# grc_ai/prompts/continuity.py

"""
Business continuity planning prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

BCP_PERSONA = "You are an expert business continuity planner certified in ISO 22301."

plan_info = info_block("Plan Information", title_label="Plan Name", type_label="Plan Type", scope_label="Scope")

# content type -> (task, output noun, requirements)
BCP_SECTIONS = {
    ContentType.BCP_PLAN: (
        'Generate a business continuity plan for "$title"',
        "plan",
        (
            "Include purpose, scope, activation criteria, roles, recovery procedures and maintenance",
            "Reference recovery time and recovery point objectives",
            "Keep it practical for $business_unit",
        ),
    ),
    ContentType.BCP_DESCRIPTION: (
        'Generate a description of the business continuity plan "$title"',
        "description",
        (
            "Explain what the plan protects and which disruptions it addresses",
            "Keep it between 100-250 words",
        ),
    ),
    ContentType.BCP_SCOPE: (
        'Generate the scope of the business continuity plan "$title"',
        "scope",
        (
            "List in-scope business functions, sites, systems and suppliers",
            "State exclusions and assumptions",
        ),
    ),
    ContentType.BCP_BUSINESS_IMPACT_ANALYSIS: (
        'Generate a business impact analysis for "$title"',
        "analysis",
        (
            "Identify critical business functions and their dependencies",
            "Estimate financial, operational, regulatory and reputational impacts over time",
            "Propose RTO and RPO values for each critical function",
        ),
    ),
    ContentType.BCP_RISK_ASSESSMENT: (
        'Generate a continuity risk assessment for "$title"',
        "risk assessment",
        (
            "Identify threats such as site loss, IT outage, pandemic and supplier failure",
            "Rate each threat by likelihood and impact",
            "Recommend treatment for the highest-rated threats",
        ),
    ),
    ContentType.BCP_RECOVERY_STRATEGIES: (
        'Generate recovery strategies for "$title"',
        "strategies",
        (
            "Cover people, premises, technology, information and suppliers",
            "Match each strategy to the recovery time objectives",
            "Note the cost and effort trade-offs",
        ),
    ),
    ContentType.BCP_RESOURCE_REQUIREMENTS: (
        'Generate the resource requirements for "$title"',
        "resource requirements",
        (
            "List staff, equipment, systems, data and facilities needed during recovery",
            "Show the quantities needed over time after the incident",
        ),
    ),
    ContentType.BCP_COMMUNICATION_PLAN: (
        'Generate a crisis communication plan for "$title"',
        "communication plan",
        (
            "Identify internal and external stakeholders",
            "Define spokespersons, channels, message templates and timing",
            "Include regulatory notification requirements",
        ),
    ),
    ContentType.BCP_TESTING_SCHEDULE: (
        'Generate a testing schedule for "$title"',
        "testing schedule",
        (
            "Plan tabletop, walkthrough, simulation and full interruption tests across the year",
            "Assign owners and success criteria for each test",
        ),
    ),
    ContentType.BCP_MAINTENANCE_SCHEDULE: (
        'Generate a maintenance schedule for "$title"',
        "maintenance schedule",
        (
            "Define review triggers and periodic review frequency",
            "Assign owners for keeping contacts, procedures and dependencies current",
        ),
    ),
    ContentType.BCP_CRITICAL_FUNCTION_DESCRIPTION: (
        'Describe the critical business function "$title"',
        "description",
        (
            "Explain what the function does and why it is critical",
            "List its upstream and downstream dependencies",
            "State the maximum tolerable period of disruption",
        ),
    ),
    ContentType.BCP_RECOVERY_STRATEGY: (
        'Generate a recovery strategy for the critical function "$title"',
        "recovery strategy",
        (
            "Describe the workaround and full recovery steps",
            "State the resources and time needed",
            "Identify the decision points and who makes them",
        ),
    ),
    ContentType.BCP_TESTING_SCENARIO: (
        'Generate a business continuity test scenario for "$title"',
        "scenario",
        (
            "Describe a realistic disruption narrative with injects at set times",
            "Define the objectives the exercise should validate",
            "Include evaluation criteria for participants",
        ),
    ),
}

for content_type, (task, what, requirements) in BCP_SECTIONS.items():
    register(content_type, PromptRule(
        persona=BCP_PERSONA,
        task=task,
        blocks=(plan_info,),
        requirements=requirements + ("Use business continuity terminology consistent with ISO 22301",),
        output=ONLY_TEXT.format(what=what),
        subject="the plan",
    ))
