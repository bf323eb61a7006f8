"""
Database package for the AI generation layer.
Contains SQLAlchemy models, connection helpers and the repositories.
"""

from .connection import build_engine, build_session_factory, create_tables, drop_tables
from .models import (
    AIConfigurationRecord, AITemplateRecord, AIGenerationLogRecord,
    AIChatLogRecord, AIErrorLogRecord
)
from .repository import AIRepository, InMemoryRepository, SQLAlchemyRepository
from .base import Base

__all__ = [
    "build_engine",
    "build_session_factory",
    "create_tables",
    "drop_tables",
    "AIConfigurationRecord",
    "AITemplateRecord",
    "AIGenerationLogRecord",
    "AIChatLogRecord",
    "AIErrorLogRecord",
    "AIRepository",
    "InMemoryRepository",
    "SQLAlchemyRepository",
    "Base"
]
