# grc_ai/prompts/privacy.py

"""
DPIA and RoPA prompts.
"""

from ..content_types import ContentType
from .base import ONLY_TEXT, PromptRule, info_block, privacy_info, register

PRIVACY_PERSONA = "You are an expert data protection officer with deep knowledge of GDPR and global privacy regulations."

_privacy_blocks = (info_block("Processing Activity", type_label="Activity Type", scope_label="Scope"), privacy_info)

register(ContentType.DPIA_DESCRIPTION, PromptRule(
    persona=PRIVACY_PERSONA,
    task='Generate a Data Protection Impact Assessment description for "$title"',
    blocks=_privacy_blocks,
    requirements=(
        "Describe the nature, scope, context and purposes of the processing",
        "Identify the data subjects and categories of personal data involved",
        "Explain why a DPIA is required for this processing activity",
        "Reference the relevant articles of GDPR or the applicable regulation",
        "Tailor the description to the $industry industry",
        "Keep it between 150-300 words",
    ),
    output=ONLY_TEXT.format(what="description"),
    subject="the processing activity",
))

register(ContentType.DPIA_RISK_ASSESSMENT, PromptRule(
    persona=PRIVACY_PERSONA,
    task='Generate a DPIA risk assessment for "$title"',
    blocks=_privacy_blocks,
    requirements=(
        "Identify the privacy risks to the rights and freedoms of data subjects",
        "Rate each risk by likelihood and severity",
        "Consider the sensitivity of the data categories listed above",
        "Propose technical and organizational measures that mitigate each risk",
        "State the residual risk after mitigation",
        "Indicate whether prior consultation with the supervisory authority is needed",
    ),
    output=ONLY_TEXT.format(what="risk assessment"),
    subject="the processing activity",
))

register(ContentType.ROPA_PURPOSE, PromptRule(
    persona=PRIVACY_PERSONA,
    task='Generate the purpose of processing for the Record of Processing Activities entry "$title"',
    blocks=_privacy_blocks,
    requirements=(
        "State the specific, explicit and legitimate purposes of the processing",
        "Keep each purpose concrete enough to satisfy Article 30 record-keeping",
        "Avoid vague purposes such as 'business needs'",
        "Keep it between 50-150 words",
    ),
    output=ONLY_TEXT.format(what="purpose"),
    subject="the processing activity",
))

register(ContentType.ROPA_LEGAL_BASIS, PromptRule(
    persona=PRIVACY_PERSONA,
    task='Recommend the lawful basis for the processing activity "$title"',
    blocks=_privacy_blocks,
    requirements=(
        "Select the most appropriate lawful basis under Article 6 GDPR",
        "Add the Article 9 condition where special category data is processed",
        "Justify the choice in relation to the purpose and data subjects",
        "Note any balancing test or consent management obligations that follow",
        "Keep it between 50-200 words",
    ),
    output=ONLY_TEXT.format(what="legal basis"),
    subject="the processing activity",
))
