# grc_ai/base/models.py

"""
Data models for AI generation operations.

Provides structured data classes for provider descriptors, per-user
configuration, templates, requests, normalized results and log entries.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..content_types import ContentType


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BackendKind(str, Enum):
    """Backend families with distinct request/response shapes."""
    OLLAMA = "ollama"
    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of a generation backend."""
    id: str
    name: str
    kind: BackendKind
    description: str
    requires_api_key: bool
    models: Tuple[str, ...]
    default_model: str

    def with_models(self, models: List[str]) -> 'ProviderDescriptor':
        """Return a copy whose model list (and default) come from ``models``."""
        return replace(self, models=tuple(models), default_model=models[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.kind.value,
            'description': self.description,
            'requires_api_key': self.requires_api_key,
            'models': list(self.models),
            'default_model': self.default_model
        }


@dataclass
class GenerationConfiguration:
    """Per-user generation settings for one provider."""
    provider: str
    model_name: str
    created_by: str = "local"
    api_key: Optional[str] = None
    api_endpoint: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 500
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.temperature < 0.0 or self.temperature > 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary, without the credential."""
        return {
            'id': self.id,
            'provider': self.provider,
            'model_name': self.model_name,
            'api_endpoint': self.api_endpoint,
            'has_api_key': bool(self.api_key),
            'temperature': self.temperature,
            'max_tokens': self.max_tokens,
            'created_by': self.created_by,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


@dataclass
class Template:
    """Reusable, parameterized prompt body."""
    id: str
    name: str
    field_type: str
    template_content: str
    description: str = ""
    industry: Optional[str] = None
    framework: Optional[str] = None
    context_variables: Dict[str, str] = field(default_factory=dict)
    is_active: bool = True
    is_default: bool = False
    version: int = 1
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Template':
        """Create a template from a dictionary, ignoring unknown keys."""
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})


@dataclass
class TemplateSelectionCriteria:
    content_type: Optional[str] = None
    industry: Optional[str] = None
    framework: Optional[str] = None
    audit_type: Optional[str] = None
    business_unit: Optional[str] = None


@dataclass
class ControlSetFields:
    name: Optional[str] = None
    framework: Optional[str] = None
    audit_title: Optional[str] = None
    audit_type: Optional[str] = None


@dataclass
class PrivacyFields:
    title: Optional[str] = None
    type: Optional[str] = None
    industry: Optional[str] = None
    data_subjects: List[str] = field(default_factory=list)
    data_categories: List[str] = field(default_factory=list)
    risk_level: Optional[str] = None


@dataclass
class ContextFields:
    """
    Structured contextual payload of a generation request.

    ``details`` carries category data without a dedicated sub-object
    (plan criticality, vendor tier, training audience, ...).
    """
    title: Optional[str] = None
    type: Optional[str] = None
    business_unit: Optional[str] = None
    scope: Optional[str] = None
    control_set: Optional[ControlSetFields] = None
    privacy: Optional[PrivacyFields] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GenerationRequest:
    """A single content generation request."""
    provider: str
    model: str
    context: str = ""
    content_type: Union[ContentType, str] = ContentType.DESCRIPTION
    fields: ContextFields = field(default_factory=ContextFields)
    template_id: Optional[str] = None
    industry: Optional[str] = None
    framework: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    user_id: Optional[str] = None
    prompt: str = ""

    def __post_init__(self):
        if not isinstance(self.content_type, ContentType):
            try:
                self.content_type = ContentType(self.content_type)
            except ValueError:
                # Unknown tags are kept and served by the generic prompt rule
                pass

    @property
    def content_type_value(self) -> str:
        if isinstance(self.content_type, ContentType):
            return self.content_type.value
        return str(self.content_type)


@dataclass
class GenerationResult:
    """Normalized result returned by every backend adapter."""
    success: bool
    content: Union[str, List[Any]] = ""
    error: Optional[str] = None
    tokens_used: Optional[int] = None
    model: Optional[str] = None
    provider: Optional[str] = None

    @classmethod
    def failure(
        cls,
        error: str,
        model: Optional[str] = None,
        provider: Optional[str] = None
    ) -> 'GenerationResult':
        return cls(success=False, content="", error=error, model=model, provider=provider)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'content': self.content,
            'error': self.error,
            'tokens_used': self.tokens_used,
            'model': self.model,
            'provider': self.provider
        }


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str

    @classmethod
    def of(cls, role: str, content: str) -> 'ChatMessage':
        return cls(role=ChatRole(role), content=content)


@dataclass
class ChatRequest:
    """A multi-turn chat request."""
    provider: str
    model: str
    messages: List[ChatMessage] = field(default_factory=list)
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    user_id: Optional[str] = None


@dataclass(frozen=True)
class GenerationLogEntry:
    """One generation attempt. Never mutated after creation."""
    user_id: str
    provider: str
    model_name: str
    prompt: str
    response: str
    tokens_used: int
    request_type: str
    success: bool
    error_message: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[str] = None


@dataclass(frozen=True)
class ChatLogEntry:
    user_id: str
    provider: str
    model_name: str
    messages: Tuple[ChatMessage, ...]
    response: str
    tokens_used: int
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[str] = None


@dataclass(frozen=True)
class ErrorLogEntry:
    user_id: str
    operation: str
    error_message: str
    context: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[str] = None


@dataclass
class BackendAvailability:
    """Transient result of a pre-flight check."""
    is_running: bool
    available_models: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class GenerationStats:
    total_generations: int = 0
    successful_generations: int = 0
    failed_generations: int = 0
    average_tokens_used: float = 0.0
    most_used_provider: str = ""
    most_used_field_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_generations': self.total_generations,
            'successful_generations': self.successful_generations,
            'failed_generations': self.failed_generations,
            'average_tokens_used': self.average_tokens_used,
            'most_used_provider': self.most_used_provider,
            'most_used_field_type': self.most_used_field_type
        }
