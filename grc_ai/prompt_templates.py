# grc_ai/prompt_templates.py

"""
Template catalog and selector.

Templates are stored through the repository; selection prefers an
explicitly requested template, then the closest industry/framework
match among the active templates of the requested content type.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

import yaml

from .base.exceptions import AIError, PersistenceError
from .base.models import ContextFields, GenerationRequest, Template, TemplateSelectionCriteria, utc_now
from .prompts.base import NOT_SPECIFIED, info_block

if TYPE_CHECKING:
    from database.repository import AIRepository

logger = logging.getLogger(__name__)

_context_block = info_block()


def load_templates_from_yaml(path: Union[str, Path]) -> List[Template]:
    """
    Read template definitions from a YAML file.

    The document is either a list of template mappings or a mapping with a
    ``templates`` key holding that list.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get('templates', [])
    if not isinstance(data, list):
        raise AIError(f"Template file {path} must contain a list of templates")

    templates = []
    for item in data:
        item = dict(item)
        item.setdefault('id', "")
        templates.append(Template.from_dict(item))
    logger.info(f"Loaded {len(templates)} templates from {path}")
    return templates


class TemplateCatalog:
    """Template CRUD plus best-template selection."""

    def __init__(self, repository: 'AIRepository'):
        self.repository = repository

    def list_templates(self, criteria: Optional[TemplateSelectionCriteria] = None) -> List[Template]:
        criteria = criteria or TemplateSelectionCriteria()
        try:
            templates = self.repository.list_templates(
                content_type=criteria.content_type,
                industry=criteria.industry,
                framework=criteria.framework,
                active_only=True
            )
        except PersistenceError as e:
            logger.error(f"Error fetching templates: {e}")
            return []
        return sorted(templates, key=lambda t: (t.field_type, t.name))

    def get_template(self, template_id: str) -> Optional[Template]:
        try:
            return self.repository.get_template(template_id)
        except PersistenceError as e:
            logger.error(f"Error fetching template {template_id}: {e}")
            return None

    def create_template(self, template: Template) -> Optional[Template]:
        try:
            return self.repository.create_template(template)
        except PersistenceError as e:
            logger.error(f"Error creating template: {e}")
            return None

    def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        changes = dict(updates)
        changes['updated_at'] = utc_now()
        try:
            return self.repository.update_template(template_id, changes)
        except PersistenceError as e:
            logger.error(f"Error updating template {template_id}: {e}")
            return None

    def delete_template(self, template_id: str) -> bool:
        try:
            return self.repository.delete_template(template_id)
        except PersistenceError as e:
            logger.error(f"Error deleting template {template_id}: {e}")
            return False

    def seed_templates(self, templates: List[Template]) -> int:
        """Create each template whose name is not already present for its content type."""
        created = 0
        for template in templates:
            existing = self.list_templates(TemplateSelectionCriteria(content_type=template.field_type))
            if any(t.name == template.name for t in existing):
                continue
            if self.create_template(replace(template, id=template.id or "")):
                created += 1
        return created

    def find_best_template(self, request: GenerationRequest) -> Optional[Template]:
        """
        Pick the template to use for ``request``, or None.

        Never raises; a storage failure is treated as "no template".
        """
        content_type = request.content_type_value

        if request.template_id:
            chosen = self.get_template(request.template_id)
            if chosen and chosen.is_active and chosen.field_type == content_type:
                return chosen
            logger.debug(f"Requested template {request.template_id} is not usable for {content_type}")

        try:
            templates = self.repository.list_templates(content_type=content_type, active_only=True)
        except PersistenceError as e:
            logger.error(f"Error finding template: {e}")
            return None

        if not templates:
            return None

        candidates = sorted(templates, key=lambda t: (not t.is_default, -t.version))
        best = candidates[0]

        for template in candidates:
            industry_match = bool(request.industry) and template.industry == request.industry
            framework_match = bool(request.framework) and template.framework == request.framework

            if industry_match and framework_match:
                return template
            if industry_match and not template.framework:
                best = template
            if framework_match and not template.industry:
                best = template
            if not template.industry and not template.framework and template.is_default:
                best = template

        return best

    @staticmethod
    def process_template(template: Template, request: GenerationRequest) -> str:
        """Fill the ``{{placeholder}}`` markers of ``template`` from ``request``."""
        fields = request.fields or ContextFields()

        def value(v) -> str:
            return str(v) if v else NOT_SPECIFIED

        context_block = _context_block(request)
        replacements = {
            '{{title}}': value(fields.title),
            '{{audit_type}}': value(fields.type),
            '{{type}}': value(fields.type),
            '{{business_unit}}': value(fields.business_unit),
            '{{scope}}': value(fields.scope),
            '{{content_type}}': request.content_type_value,
            '{{context}}': request.context or "",
            '{{auditInfo}}': context_block,
            '{{context_block}}': context_block,
        }

        prompt = template.template_content
        for marker, replacement in replacements.items():
            prompt = prompt.replace(marker, replacement)

        if request.industry and template.industry:
            prompt += f"\n\nIndustry Context: This template is specifically designed for the {request.industry} industry."
        if request.framework and template.framework:
            prompt += f"\n\nFramework Context: This template follows {request.framework} standards and best practices."

        return prompt
