"""
SQLAlchemy database models for AI configurations, templates and logs.
"""

import uuid

from sqlalchemy import Boolean, Column, Float, Index, Integer, JSON, String, Text, UniqueConstraint

from .base import Base, CreatedAtMixin, TimestampMixin

def new_id() -> str:
    return uuid.uuid4().hex

class AIConfigurationRecord(Base, TimestampMixin):
    """Per-user generation configuration; one row per (user, provider)."""
    __tablename__ = 'ai_configurations'
    __table_args__ = (
        UniqueConstraint('created_by', 'provider', name='uq_ai_configurations_user_provider'),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    provider = Column(String(50), nullable=False)
    model_name = Column(String(200), nullable=False)
    api_key = Column(Text, nullable=True)
    api_endpoint = Column(String(500), nullable=True)
    temperature = Column(Float, nullable=False, default=0.7)
    max_tokens = Column(Integer, nullable=False, default=500)
    created_by = Column(String(100), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<AIConfigurationRecord(provider='{self.provider}', model='{self.model_name}', user='{self.created_by}')>"

class AITemplateRecord(Base, TimestampMixin):
    """Reusable prompt template."""
    __tablename__ = 'ai_templates'

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    field_type = Column(String(100), nullable=False, index=True)
    template_content = Column(Text, nullable=False)
    industry = Column(String(100), nullable=True)
    framework = Column(String(100), nullable=True)
    context_variables = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    is_default = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    created_by = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<AITemplateRecord(name='{self.name}', field_type='{self.field_type}', version={self.version})>"

class AIGenerationLogRecord(Base, CreatedAtMixin):
    """One generation attempt."""
    __tablename__ = 'ai_generation_logs'
    __table_args__ = (
        Index('idx_ai_generation_logs_user_created', 'user_id', 'created_at'),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(100), nullable=False)
    provider = Column(String(50), nullable=False)
    model_name = Column(String(200), nullable=False)
    prompt = Column(Text, nullable=False, default="")
    response = Column(Text, nullable=False, default="")
    tokens_used = Column(Integer, nullable=False, default=0)
    request_type = Column(String(100), nullable=False)
    success = Column(Boolean, nullable=False)
    error_message = Column(Text, nullable=True)

class AIChatLogRecord(Base, CreatedAtMixin):
    """One chat exchange."""
    __tablename__ = 'ai_chat_logs'
    __table_args__ = (
        Index('idx_ai_chat_logs_user_created', 'user_id', 'created_at'),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(100), nullable=False)
    provider = Column(String(50), nullable=False)
    model_name = Column(String(200), nullable=False)
    messages = Column(JSON, nullable=False, default=list)
    response = Column(Text, nullable=False, default="")
    tokens_used = Column(Integer, nullable=False, default=0)

class AIErrorLogRecord(Base, CreatedAtMixin):
    """Operational error raised outside a single generation attempt."""
    __tablename__ = 'ai_error_logs'

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(100), nullable=False, index=True)
    operation = Column(String(100), nullable=False)
    error_message = Column(Text, nullable=False)
    context = Column(JSON, nullable=False, default=dict)
