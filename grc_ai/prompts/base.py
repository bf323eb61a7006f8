# grc_ai/prompts/base.py

"""
Prompt rule type, the rule table and the shared context blocks.

A rule renders the same skeleton for every content type:

    <persona> <task> based on the following information:

    <context blocks>

    Context: <free text>

    <extra sections>

    Requirements:
    - ...

    <output instruction>

Rule text may reference $title, $audit_type, $business_unit, $scope,
$framework, $name and $industry; they are filled with string.Template.
"""

from dataclasses import dataclass
from string import Template
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from ..base.models import ContextFields, GenerationRequest
from ..content_types import ContentType

NOT_SPECIFIED = "Not specified"
ONLY_TEXT = "Generate only the {what} text, no additional formatting or explanations."

Block = Callable[[GenerationRequest], str]


def or_default(value, default: str = NOT_SPECIFIED) -> str:
    if value is None:
        return default
    if isinstance(value, (list, tuple, set)):
        return ", ".join(str(v) for v in value) if value else default
    text = str(value).strip()
    return text or default


def template_variables(request: GenerationRequest, subject: str) -> Dict[str, str]:
    """Substitution values for rule text; never missing a key."""
    fields = request.fields or ContextFields()
    control_set = fields.control_set
    privacy = fields.privacy

    framework = request.framework or (control_set.framework if control_set else None)
    industry = request.industry or (privacy.industry if privacy else None)

    return {
        'title': or_default(fields.title, subject),
        'audit_type': or_default(fields.type, "internal"),
        'business_unit': or_default(fields.business_unit, "the organization"),
        'scope': or_default(fields.scope),
        'framework': or_default(framework, "the applicable framework"),
        'name': or_default(control_set.name if control_set else None, "the control set"),
        'industry': or_default(industry, "the organization's industry"),
    }


def info_block(
    heading: str = "Audit Information",
    title_label: str = "Title",
    type_label: str = "Type",
    scope_label: str = "Existing Scope"
) -> Block:
    """Block listing the four common contextual fields."""
    def render(request: GenerationRequest) -> str:
        fields = request.fields or ContextFields()
        return "\n".join([
            f"{heading}:",
            f"- {title_label}: {or_default(fields.title)}",
            f"- {type_label}: {or_default(fields.type)}",
            f"- Business Unit: {or_default(fields.business_unit)}",
            f"- {scope_label}: {or_default(fields.scope)}",
        ])
    return render


audit_info = info_block()


def control_set_info(request: GenerationRequest) -> str:
    control_set = (request.fields or ContextFields()).control_set
    if control_set is None:
        return ""
    return "\n".join([
        "Control Set Information:",
        f"- Name: {or_default(control_set.name)}",
        f"- Framework: {or_default(control_set.framework)}",
        f"- Associated Audit: {or_default(control_set.audit_title)}",
        f"- Audit Type: {or_default(control_set.audit_type)}",
    ])


def privacy_info(request: GenerationRequest) -> str:
    privacy = (request.fields or ContextFields()).privacy
    if privacy is None:
        return ""
    return "\n".join([
        "Privacy Assessment Information:",
        f"- Title: {or_default(privacy.title)}",
        f"- Assessment Type: {or_default(privacy.type.upper() if privacy.type else None)}",
        f"- Industry: {or_default(privacy.industry)}",
        f"- Data Subjects: {or_default(privacy.data_subjects)}",
        f"- Data Categories: {or_default(privacy.data_categories)}",
        f"- Risk Level: {or_default(privacy.risk_level)}",
    ])


def details_info(request: GenerationRequest) -> str:
    """Category-specific extras, one line per key, labels derived from the key."""
    details = (request.fields or ContextFields()).details
    if not details:
        return ""
    lines = ["Additional Details:"]
    for key, value in details.items():
        label = str(key).replace("_", " ").title()
        lines.append(f"- {label}: {or_default(value)}")
    return "\n".join(lines)


def qualifiers_info(request: GenerationRequest) -> str:
    parts = []
    if request.industry:
        parts.append(f"- Industry: {request.industry}")
    if request.framework:
        parts.append(f"- Framework: {request.framework}")
    if not parts:
        return ""
    return "Organizational Context:\n" + "\n".join(parts)


@dataclass(frozen=True)
class PromptRule:
    """Prompt-construction rule for one content type."""
    persona: str
    task: str
    requirements: Tuple[str, ...]
    output: str = ONLY_TEXT.format(what="content")
    blocks: Tuple[Block, ...] = (audit_info,)
    sections: Tuple[Block, ...] = ()
    subject: str = "the audit"

    def __call__(self, request: GenerationRequest) -> str:
        variables = template_variables(request, self.subject)

        def fill(text: str) -> str:
            return Template(text).safe_substitute(variables)

        parts = [f"{fill(self.persona)} {fill(self.task)} based on the following information:"]

        for block in self.blocks + (qualifiers_info, details_info):
            rendered = block(request)
            if rendered:
                parts.append(rendered)

        parts.append(f"Context: {request.context or ''}".rstrip())

        for section in self.sections:
            rendered = section(request)
            if rendered:
                parts.append(rendered)

        parts.append("Requirements:\n" + "\n".join(f"- {fill(r)}" for r in self.requirements))
        parts.append(fill(self.output))
        return "\n\n".join(parts)


PROMPT_RULES: Dict[str, PromptRule] = {}


def register(content_types: Union[ContentType, Iterable[ContentType]], rule: PromptRule):
    """Map one or more content types to ``rule``."""
    if isinstance(content_types, ContentType):
        content_types = [content_types]
    for content_type in content_types:
        PROMPT_RULES[content_type.value] = rule


def get_rule(content_type: Union[ContentType, str]) -> Optional[PromptRule]:
    key = content_type.value if isinstance(content_type, ContentType) else str(content_type)
    return PROMPT_RULES.get(key)
