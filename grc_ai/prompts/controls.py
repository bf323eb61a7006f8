# grc_ai/prompts/controls.py

"""
Control set, control generation, compliance mapping and risk/control matrix prompts.
"""

from ..base.models import ContextFields, GenerationRequest
from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, control_set_info, info_block, register

GRC_PERSONA = (
    "You are an expert in governance, risk, and compliance (GRC) "
    "with extensive knowledge of control frameworks."
)

CONTROL_JSON_SCHEMA = """Format your response as a JSON array of objects with the following structure:
[
  {
    "control_code": "CC-001",
    "title": "Control Title",
    "description": "Detailed control description explaining what needs to be done",
    "control_type": "preventive|detective|corrective",
    "frequency": "continuous|daily|weekly|monthly|quarterly|annually",
    "process_area": "Relevant process area",
    "testing_procedure": "How to test this control",
    "evidence_requirements": "What evidence is needed to verify this control"
  }
]

Generate only the JSON array, no additional text or formatting."""

RISK_MATRIX_JSON_RULES = """CRITICAL: You must respond with ONLY valid JSON. Follow these rules strictly:
1. Use ONLY double quotes (") for strings, never single quotes (')
2. Escape any quotes within strings using backslash (\\")
3. Do not include any explanatory text before or after the JSON
4. Ensure all strings are properly closed
5. Do not include trailing commas
6. Use the exact format specified below

JSON FORMAT:
{
  "matrix": {
    "name": "string",
    "description": "string",
    "matrix_type": "string",
    "risk_levels": ["string"],
    "control_effectiveness_levels": ["string"]
  },
  "cells": [
    {
      "risk_level": "string",
      "control_effectiveness": "string",
      "position_x": number,
      "position_y": number,
      "color_code": "string",
      "description": "string",
      "action_required": "string"
    }
  ]
}"""

MATRIX_LEVELS = {
    3: (("Low", "Medium", "High"),
        ("Ineffective", "Partially Effective", "Effective")),
    4: (("Low", "Medium", "High", "Critical"),
        ("Ineffective", "Partially Effective", "Effective", "Highly Effective")),
    5: (("Very Low", "Low", "Medium", "High", "Critical"),
        ("Ineffective", "Weak", "Partially Effective", "Effective", "Highly Effective")),
}


def matrix_dimension(matrix_size) -> int:
    """3 for "3x3", 4 for "4x4", otherwise 5."""
    text = str(matrix_size or "")
    if text.startswith("3"):
        return 3
    if text.startswith("4"):
        return 4
    return 5


def _matrix_specification(request: GenerationRequest) -> str:
    details = (request.fields or ContextFields()).details or {}
    dimension = matrix_dimension(details.get("matrix_size"))
    risk_levels, control_levels = MATRIX_LEVELS[dimension]
    return "\n".join([
        "Matrix Specification:",
        f"- Matrix Size: {dimension}x{dimension} ({dimension * dimension} cells)",
        f"- Risk Levels: {', '.join(risk_levels)}",
        f"- Control Effectiveness Levels: {', '.join(control_levels)}",
        f"- Generate exactly {dimension * dimension} cells, one for each position in the matrix",
    ])


register(ContentType.CONTROL_SET_DESCRIPTION, PromptRule(
    persona=GRC_PERSONA,
    task="Generate a comprehensive control set description",
    blocks=(control_set_info,),
    requirements=(
        'Create a detailed, professional description for the control set "$name"',
        "The description should explain the purpose and scope of this control set",
        "Include what types of controls are typically included in this framework",
        "Explain how this control set helps with compliance and risk management",
        "Make it relevant to the framework: $framework",
        "If associated with an audit, relate it to the audit context",
        "Use professional GRC and compliance terminology",
        "Keep it between 150-400 words",
        "Make it informative for auditors and compliance professionals",
    ),
    output=ONLY_TEXT.format(what="description"),
    subject="the control set",
))

register(ContentType.CONTROL_GENERATION, PromptRule(
    persona=GRC_PERSONA,
    task='Generate 5-6 specific, actionable controls for the control set "$name"',
    blocks=(control_set_info,),
    requirements=(
        "Create 5-6 realistic, implementable controls",
        "Each control should be relevant to the $framework framework",
        "Controls should be specific to the control set purpose",
        "Include a mix of preventive, detective, and corrective controls",
        "Use professional control language and terminology",
        "Each control should have a clear, actionable description",
        "Controls should address key risk areas for this framework",
        "Make them practical for real-world implementation",
    ),
    output=CONTROL_JSON_SCHEMA,
    subject="the control set",
))

register(ContentType.COMPLIANCE_MAPPING, PromptRule(
    persona=GRC_PERSONA,
    task='Generate a compliance mapping for "$title" against $framework',
    blocks=(info_block("Policy Information", scope_label="Scope"), control_set_info),
    requirements=(
        "Map each key requirement of $framework to the relevant policy statements or controls",
        "Identify requirements that are fully covered, partially covered, or not covered",
        "Reference requirement identifiers or clause numbers where they exist",
        "Highlight gaps and recommend the control or policy change that closes each one",
        "Present the mapping as a structured list grouped by requirement area",
        "Use professional compliance terminology",
    ),
    output=ONLY_TEXT.format(what="compliance mapping"),
    subject="the policy",
))

register(ContentType.RISK_CONTROL_MATRIX, PromptRule(
    persona="You are an expert in Risk Management and Control Frameworks.",
    task="Generate a comprehensive Risk-Control Matrix for $industry",
    blocks=(info_block("Organization Information", type_label="Business Size", scope_label="Risk Categories"),),
    sections=(_matrix_specification,),
    requirements=(
        "Use the risk levels and control effectiveness levels listed in the matrix specification",
        "Generate appropriate color coding for each matrix cell (green for low risk/high effectiveness, red for high risk/low effectiveness)",
        "Provide specific action requirements for each cell",
        "Consider industry best practices and regulatory requirements for $industry",
        "Ensure the matrix is comprehensive and actionable",
    ),
    output="Respond with ONLY valid JSON. Do not include any explanatory text before or after the JSON.",
    subject="the organization",
))

register(ContentType.CONTROL_EVALUATION, PromptRule(
    persona="You are an expert control assurance professional.",
    task='Generate a control effectiveness evaluation for "$title"',
    blocks=(info_block("Control Information", type_label="Control Type", scope_label="Testing Scope"), control_set_info),
    requirements=(
        "Assess the design effectiveness and the operating effectiveness of the control",
        "Summarize the testing performed and the evidence examined",
        "Classify the overall result as Effective, Partially Effective, or Ineffective",
        "Identify exceptions or deficiencies and their potential impact",
        "Recommend specific remediation actions with owners and target dates",
        "Keep it between 150-350 words",
    ),
    output=ONLY_TEXT.format(what="evaluation"),
    subject="the control",
))

