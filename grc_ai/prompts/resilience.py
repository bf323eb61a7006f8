# grc_ai/prompts/resilience.py

"""
Operational resilience prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

RESILIENCE_PERSONA = "You are an expert in operational resilience and crisis management."

resilience_info = info_block("Resilience Context", type_label="Assessment Type", scope_label="Scope")

RESILIENCE_SECTIONS = {
    ContentType.RESILIENCE_ASSESSMENT: ("resilience assessment", (
        "Assess the ability of important business services to stay within impact tolerances",
        "Identify vulnerabilities across people, processes, technology and third parties",
    )),
    ContentType.RESILIENCE_STRATEGY: ("resilience strategy", (
        "Set strategic resilience objectives and the initiatives that achieve them",
        "Prioritize initiatives by risk reduction",
    )),
    ContentType.CRISIS_MANAGEMENT_PLAN: ("crisis management plan", (
        "Define the crisis management team, activation criteria and decision-making process",
        "Include stakeholder communication and escalation",
    )),
    ContentType.BUSINESS_IMPACT_ANALYSIS: ("business impact analysis", (
        "Identify important business services and their impact tolerances",
        "Assess impacts over time for each service",
    )),
    ContentType.RECOVERY_STRATEGIES: ("recovery strategies", (
        "Propose recovery options for each important business service",
        "Compare recovery time against impact tolerance",
    )),
    ContentType.RESILIENCE_METRICS: ("resilience metrics", (
        "Define leading and lagging indicators of resilience",
        "Set thresholds and reporting frequency for each metric",
    )),
    ContentType.SCENARIO_ANALYSIS: ("scenario analysis", (
        "Describe severe but plausible disruption scenarios",
        "Assess whether services remain within impact tolerances in each scenario",
    )),
    ContentType.RESILIENCE_FRAMEWORK: ("resilience framework", (
        "Describe governance, mapping, tolerance setting, testing and reporting components",
        "Reference DORA, PRA or other applicable regulation where relevant",
    )),
    ContentType.CAPACITY_ASSESSMENT: ("capacity assessment", (
        "Assess the capacity of people, systems and suppliers to absorb disruption",
        "Identify capacity constraints and single points of failure",
    )),
    ContentType.ADAPTABILITY_PLAN: ("adaptability plan", (
        "Describe how the organization will adapt operations to changing conditions",
        "Include triggers, decision rights and flexible resourcing",
    )),
    ContentType.RESILIENCE_MONITORING: ("monitoring plan", (
        "Define monitoring activities, data sources and escalation thresholds",
        "Assign owners for each monitoring activity",
    )),
    ContentType.CONTINUOUS_IMPROVEMENT: ("continuous improvement plan", (
        "Describe how lessons from incidents and tests feed back into the program",
        "Define the review cycle and improvement tracking",
    )),
}

for content_type, (what, requirements) in RESILIENCE_SECTIONS.items():
    register(content_type, PromptRule(
        persona=RESILIENCE_PERSONA,
        task=f'Generate a {what} for "$title"',
        blocks=(resilience_info,),
        requirements=requirements + (
            "Consider the regulatory expectations of the $industry industry",
            "Use practical, actionable language",
        ),
        output=ONLY_TEXT.format(what=what),
        subject="the organization",
    ))
