# grc_ai/prompts/__init__.py

"""
Per-content-type prompt rules.

Importing this package registers every category module in PROMPT_RULES.
"""

from .base import PROMPT_RULES, PromptRule, get_rule, register
from . import audit, controls, privacy, policy, continuity, vendor, security  # noqa: F401
from . import training, findings, resilience, supply_chain, reporting  # noqa: F401
from .audit import GENERIC_RULE, audit_type_guidance
from .controls import RISK_MATRIX_JSON_RULES, matrix_dimension

__all__ = [
    'PROMPT_RULES',
    'PromptRule',
    'get_rule',
    'register',
    'GENERIC_RULE',
    'RISK_MATRIX_JSON_RULES',
    'audit_type_guidance',
    'matrix_dimension'
]
