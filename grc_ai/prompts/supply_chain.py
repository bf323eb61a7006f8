# grc_ai/prompts/supply_chain.py

"""
Supply chain risk prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, register

SUPPLY_CHAIN_PERSONA = "You are an expert in supply chain risk management."

supply_chain_info = info_block("Supply Chain Context", type_label="Category", scope_label="Scope")

SUPPLY_CHAIN_SECTIONS = {
    ContentType.SUPPLY_CHAIN_RISK: ("supply chain risk overview",
                                    "Identify the main risk categories: supplier, logistics, geopolitical, cyber and ESG"),
    ContentType.SUPPLY_CHAIN_RISK_ASSESSMENT: ("supply chain risk assessment",
                                               "Rate each supply chain risk by likelihood, impact and velocity"),
    ContentType.VENDOR_EVALUATION_CRITERIA: ("vendor evaluation criteria",
                                             "Define weighted criteria for quality, cost, delivery, risk and sustainability"),
    ContentType.RISK_MITIGATION_STRATEGIES: ("risk mitigation strategies",
                                             "Propose dual sourcing, buffer stock, contractual and monitoring measures"),
    ContentType.SUPPLY_CHAIN_MAPPING: ("supply chain map",
                                       "Describe the tiers of suppliers and the flows of goods, data and money between them"),
    ContentType.VENDOR_TIER_CLASSIFICATION: ("vendor tier classification",
                                             "Define tiers by criticality and spend, with the oversight required for each tier"),
    ContentType.RISK_PROPAGATION_ANALYSIS: ("risk propagation analysis",
                                            "Explain how a disruption at one supplier cascades through the tiers"),
    ContentType.SUPPLY_CHAIN_RESILIENCE_SCORING: ("resilience scoring model",
                                                  "Define scoring dimensions, weights and how the score is interpreted"),
    ContentType.DISRUPTION_RESPONSE_PLAN: ("disruption response plan",
                                           "Describe detection, escalation, alternate sourcing and recovery steps"),
    ContentType.SUPPLIER_DEVELOPMENT_PROGRAM: ("supplier development program",
                                               "Describe how key suppliers are helped to improve capability and compliance"),
    ContentType.PERFORMANCE_MONITORING_FRAMEWORK: ("performance monitoring framework",
                                                   "Define KPIs, review cadence and escalation for supplier performance"),
    ContentType.COMPLIANCE_ASSESSMENT_CRITERIA: ("compliance assessment criteria",
                                                 "List regulatory and contractual criteria suppliers must meet and the evidence required"),
    ContentType.FINANCIAL_STABILITY_ANALYSIS: ("financial stability analysis",
                                               "Assess supplier liquidity, solvency, dependency and warning signs"),
}

for content_type, (what, focus) in SUPPLY_CHAIN_SECTIONS.items():
    register(content_type, PromptRule(
        persona=SUPPLY_CHAIN_PERSONA,
        task=f'Generate a {what} for "$title"',
        blocks=(supply_chain_info,),
        requirements=(
            focus,
            "Consider the $industry industry",
            "Make it practical for procurement and risk teams",
        ),
        output=ONLY_TEXT.format(what=what),
        subject="the supply chain",
    ))
