# grc_ai/prompt_builder.py

"""
Turns a generation request into the final prompt text.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .base.models import GenerationRequest
from .content_types import ContentType
from .prompt_templates import TemplateCatalog
from .prompts import GENERIC_RULE, RISK_MATRIX_JSON_RULES, get_rule
from .utils import sanitize_input

logger = logging.getLogger(__name__)

DEFAULT_MATRIX_MIN_TOKENS = 4000


@dataclass
class PreparedPrompt:
    """Final prompt text and the token budget to request."""
    text: str
    max_tokens: Optional[int]
    from_template: bool = False


class PromptBuilder:
    """Builds prompts from templates or from the built-in per-content-type rules."""

    def __init__(self, template_catalog: Optional[TemplateCatalog] = None, settings=None):
        self.template_catalog = template_catalog
        self.matrix_min_tokens = getattr(settings, 'RISK_CONTROL_MATRIX_MIN_TOKENS', DEFAULT_MATRIX_MIN_TOKENS)
        self.max_input_length = getattr(settings, 'MAX_INPUT_LENGTH', 10000)

    def build_prompt(self, request: GenerationRequest) -> str:
        """Render the built-in rule for the request's content type."""
        rule = get_rule(request.content_type_value)
        if rule is None:
            logger.debug(f"No prompt rule for {request.content_type_value}, using generic rule")
            rule = GENERIC_RULE
        return rule(request)

    def build_enhanced_prompt(self, request: GenerationRequest) -> str:
        """Use the best matching template when there is one, otherwise the built-in rule."""
        prompt, _ = self._render(request)
        return prompt

    def _render(self, request: GenerationRequest):
        if self.template_catalog is not None:
            template = self.template_catalog.find_best_template(request)
            if template is not None:
                logger.debug(f"Using template {template.id} for {request.content_type_value}")
                return self.template_catalog.process_template(template, request), True
        return self.build_prompt(request), False

    def prepare(self, request: GenerationRequest) -> PreparedPrompt:
        """
        Build the prompt actually sent to a backend.

        The free-text context is sanitized first, on a copy; the caller's
        request is left untouched. Risk/control matrix requests get a
        raised token floor and the strict JSON rules.
        """
        if request.context:
            request = replace(request, context=sanitize_input(request.context, self.max_input_length))

        text, from_template = self._render(request)
        max_tokens = request.max_tokens

        if request.content_type_value == ContentType.RISK_CONTROL_MATRIX.value:
            if not max_tokens or max_tokens < self.matrix_min_tokens:
                max_tokens = self.matrix_min_tokens
            text = f"{text}\n\n{RISK_MATRIX_JSON_RULES}"

        return PreparedPrompt(text=text, max_tokens=max_tokens, from_template=from_template)
