"""
Persistence collaborators for configurations, templates and logs.

``AIRepository`` is the contract the services consume. ``InMemoryRepository``
keeps everything in process; ``SQLAlchemyRepository`` stores it in the
tables defined in ``database.models``. Storage failures surface as
``PersistenceError``.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from grc_ai.base.exceptions import PersistenceError
from grc_ai.base.models import (
    ChatLogEntry,
    ChatMessage,
    ErrorLogEntry,
    GenerationConfiguration,
    GenerationLogEntry,
    Template,
    utc_now,
)

from .models import (
    AIChatLogRecord,
    AIConfigurationRecord,
    AIErrorLogRecord,
    AIGenerationLogRecord,
    AITemplateRecord,
    new_id,
)

logger = logging.getLogger(__name__)

TEMPLATE_UPDATABLE_FIELDS = (
    'name', 'description', 'field_type', 'template_content', 'industry', 'framework',
    'context_variables', 'is_active', 'is_default', 'version', 'updated_at'
)


class AIRepository(ABC):
    """Storage contract used by the configuration, template and log services."""

    # Configurations

    @abstractmethod
    def get_configurations(self, user_id: str) -> List[GenerationConfiguration]:
        pass

    @abstractmethod
    def upsert_configuration(self, config: GenerationConfiguration) -> GenerationConfiguration:
        """Insert or replace the configuration for (created_by, provider)."""
        pass

    @abstractmethod
    def delete_configuration(self, config_id: str, user_id: str) -> bool:
        pass

    # Templates

    @abstractmethod
    def list_templates(
        self,
        content_type: Optional[str] = None,
        industry: Optional[str] = None,
        framework: Optional[str] = None,
        active_only: bool = True
    ) -> List[Template]:
        pass

    @abstractmethod
    def get_template(self, template_id: str) -> Optional[Template]:
        pass

    @abstractmethod
    def create_template(self, template: Template) -> Template:
        pass

    @abstractmethod
    def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        pass

    @abstractmethod
    def delete_template(self, template_id: str) -> bool:
        pass

    # Logs

    @abstractmethod
    def append_generation_log(self, entry: GenerationLogEntry) -> GenerationLogEntry:
        pass

    @abstractmethod
    def query_generation_logs(
        self,
        user_id: str,
        limit: Optional[int] = None,
        newest_first: bool = True
    ) -> List[GenerationLogEntry]:
        pass

    @abstractmethod
    def append_chat_log(self, entry: ChatLogEntry) -> ChatLogEntry:
        pass

    @abstractmethod
    def query_chat_logs(self, user_id: str, limit: Optional[int] = None) -> List[ChatLogEntry]:
        pass

    @abstractmethod
    def append_error_log(self, entry: ErrorLogEntry) -> ErrorLogEntry:
        pass

    @abstractmethod
    def query_error_logs(self, user_id: str, limit: Optional[int] = None) -> List[ErrorLogEntry]:
        pass


def _template_matches(
    template: Template,
    content_type: Optional[str],
    industry: Optional[str],
    framework: Optional[str],
    active_only: bool
) -> bool:
    if active_only and not template.is_active:
        return False
    if content_type and template.field_type != content_type:
        return False
    if industry and template.industry != industry:
        return False
    if framework and template.framework != framework:
        return False
    return True


def _newest(entries: list, limit: Optional[int], newest_first: bool = True) -> list:
    ordered = list(reversed(entries)) if newest_first else list(entries)
    return ordered[:limit] if limit is not None else ordered


class InMemoryRepository(AIRepository):
    """Process-local storage; used when no database is configured and in tests."""

    def __init__(self):
        self._configurations: List[GenerationConfiguration] = []
        self._templates: Dict[str, Template] = {}
        self._generation_logs: List[GenerationLogEntry] = []
        self._chat_logs: List[ChatLogEntry] = []
        self._error_logs: List[ErrorLogEntry] = []

    def get_configurations(self, user_id: str) -> List[GenerationConfiguration]:
        return [c for c in self._configurations if c.created_by == user_id]

    def upsert_configuration(self, config: GenerationConfiguration) -> GenerationConfiguration:
        now = utc_now()
        for index, existing in enumerate(self._configurations):
            if existing.created_by == config.created_by and existing.provider == config.provider:
                stored = replace(
                    config,
                    id=existing.id,
                    created_at=existing.created_at,
                    updated_at=config.updated_at or now
                )
                self._configurations[index] = stored
                return stored

        stored = replace(
            config,
            id=config.id or new_id(),
            created_at=config.created_at or now,
            updated_at=config.updated_at or now
        )
        self._configurations.append(stored)
        return stored

    def delete_configuration(self, config_id: str, user_id: str) -> bool:
        before = len(self._configurations)
        self._configurations = [
            c for c in self._configurations
            if not (c.id == config_id and c.created_by == user_id)
        ]
        return len(self._configurations) < before

    def list_templates(self, content_type=None, industry=None, framework=None, active_only=True) -> List[Template]:
        return [
            t for t in self._templates.values()
            if _template_matches(t, content_type, industry, framework, active_only)
        ]

    def get_template(self, template_id: str) -> Optional[Template]:
        return self._templates.get(template_id)

    def create_template(self, template: Template) -> Template:
        now = utc_now()
        stored = replace(
            template,
            id=template.id or new_id(),
            created_at=template.created_at or now,
            updated_at=template.updated_at or now
        )
        self._templates[stored.id] = stored
        return stored

    def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        existing = self._templates.get(template_id)
        if existing is None:
            return None
        changes = {k: v for k, v in updates.items() if k in TEMPLATE_UPDATABLE_FIELDS}
        stored = replace(existing, **changes)
        self._templates[template_id] = stored
        return stored

    def delete_template(self, template_id: str) -> bool:
        return self._templates.pop(template_id, None) is not None

    def append_generation_log(self, entry: GenerationLogEntry) -> GenerationLogEntry:
        stored = replace(entry, id=entry.id or new_id())
        self._generation_logs.append(stored)
        return stored

    def query_generation_logs(self, user_id, limit=None, newest_first=True) -> List[GenerationLogEntry]:
        entries = [e for e in self._generation_logs if e.user_id == user_id]
        return _newest(entries, limit, newest_first)

    def append_chat_log(self, entry: ChatLogEntry) -> ChatLogEntry:
        stored = replace(entry, id=entry.id or new_id())
        self._chat_logs.append(stored)
        return stored

    def query_chat_logs(self, user_id, limit=None) -> List[ChatLogEntry]:
        return _newest([e for e in self._chat_logs if e.user_id == user_id], limit)

    def append_error_log(self, entry: ErrorLogEntry) -> ErrorLogEntry:
        stored = replace(entry, id=entry.id or new_id())
        self._error_logs.append(stored)
        return stored

    def query_error_logs(self, user_id, limit=None) -> List[ErrorLogEntry]:
        return _newest([e for e in self._error_logs if e.user_id == user_id], limit)


class SQLAlchemyRepository(AIRepository):
    """Relational storage backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str):
        """Open a session, commit on success and wrap storage errors."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"[DATABASE] {operation} failed: {str(e)}")
            raise PersistenceError(operation, e) from e
        finally:
            session.close()

    # Conversions

    @staticmethod
    def _to_configuration(record: AIConfigurationRecord) -> GenerationConfiguration:
        return GenerationConfiguration(
            id=record.id,
            provider=record.provider,
            model_name=record.model_name,
            api_key=record.api_key,
            api_endpoint=record.api_endpoint,
            temperature=record.temperature,
            max_tokens=record.max_tokens,
            created_by=record.created_by,
            is_active=record.is_active,
            created_at=record.created_at,
            updated_at=record.updated_at
        )

    @staticmethod
    def _to_template(record: AITemplateRecord) -> Template:
        return Template(
            id=record.id,
            name=record.name,
            description=record.description,
            field_type=record.field_type,
            template_content=record.template_content,
            industry=record.industry,
            framework=record.framework,
            context_variables=dict(record.context_variables or {}),
            is_active=record.is_active,
            is_default=record.is_default,
            version=record.version,
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=record.updated_at
        )

    @staticmethod
    def _to_generation_log(record: AIGenerationLogRecord) -> GenerationLogEntry:
        return GenerationLogEntry(
            id=record.id,
            user_id=record.user_id,
            provider=record.provider,
            model_name=record.model_name,
            prompt=record.prompt,
            response=record.response,
            tokens_used=record.tokens_used,
            request_type=record.request_type,
            success=record.success,
            error_message=record.error_message,
            created_at=record.created_at
        )

    @staticmethod
    def _to_chat_log(record: AIChatLogRecord) -> ChatLogEntry:
        return ChatLogEntry(
            id=record.id,
            user_id=record.user_id,
            provider=record.provider,
            model_name=record.model_name,
            messages=tuple(ChatMessage.of(m['role'], m['content']) for m in record.messages or []),
            response=record.response,
            tokens_used=record.tokens_used,
            created_at=record.created_at
        )

    @staticmethod
    def _to_error_log(record: AIErrorLogRecord) -> ErrorLogEntry:
        return ErrorLogEntry(
            id=record.id,
            user_id=record.user_id,
            operation=record.operation,
            error_message=record.error_message,
            context=dict(record.context or {}),
            created_at=record.created_at
        )

    # Configurations

    def get_configurations(self, user_id: str) -> List[GenerationConfiguration]:
        with self._session("get_configurations") as session:
            records = session.scalars(
                select(AIConfigurationRecord)
                .where(AIConfigurationRecord.created_by == user_id)
                .order_by(AIConfigurationRecord.created_at)
            ).all()
            return [self._to_configuration(r) for r in records]

    def upsert_configuration(self, config: GenerationConfiguration) -> GenerationConfiguration:
        with self._session("upsert_configuration") as session:
            record = session.scalars(
                select(AIConfigurationRecord).where(
                    AIConfigurationRecord.created_by == config.created_by,
                    AIConfigurationRecord.provider == config.provider
                )
            ).first()

            if record is None:
                record = AIConfigurationRecord(
                    id=config.id or new_id(),
                    provider=config.provider,
                    created_by=config.created_by
                )
                session.add(record)

            record.model_name = config.model_name
            record.api_key = config.api_key
            record.api_endpoint = config.api_endpoint
            record.temperature = config.temperature
            record.max_tokens = config.max_tokens
            record.is_active = config.is_active
            record.updated_at = config.updated_at or utc_now()

            session.flush()
            return self._to_configuration(record)

    def delete_configuration(self, config_id: str, user_id: str) -> bool:
        with self._session("delete_configuration") as session:
            record = session.scalars(
                select(AIConfigurationRecord).where(
                    AIConfigurationRecord.id == config_id,
                    AIConfigurationRecord.created_by == user_id
                )
            ).first()
            if record is None:
                return False
            session.delete(record)
            return True

    # Templates

    def list_templates(self, content_type=None, industry=None, framework=None, active_only=True) -> List[Template]:
        query = select(AITemplateRecord)
        if active_only:
            query = query.where(AITemplateRecord.is_active.is_(True))
        if content_type:
            query = query.where(AITemplateRecord.field_type == content_type)
        if industry:
            query = query.where(AITemplateRecord.industry == industry)
        if framework:
            query = query.where(AITemplateRecord.framework == framework)

        with self._session("list_templates") as session:
            records = session.scalars(query.order_by(AITemplateRecord.created_at)).all()
            return [self._to_template(r) for r in records]

    def get_template(self, template_id: str) -> Optional[Template]:
        with self._session("get_template") as session:
            record = session.get(AITemplateRecord, template_id)
            return self._to_template(record) if record else None

    def create_template(self, template: Template) -> Template:
        with self._session("create_template") as session:
            record = AITemplateRecord(
                id=template.id or new_id(),
                name=template.name,
                description=template.description,
                field_type=template.field_type,
                template_content=template.template_content,
                industry=template.industry,
                framework=template.framework,
                context_variables=dict(template.context_variables),
                is_active=template.is_active,
                is_default=template.is_default,
                version=template.version,
                created_by=template.created_by
            )
            session.add(record)
            session.flush()
            return self._to_template(record)

    def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        with self._session("update_template") as session:
            record = session.get(AITemplateRecord, template_id)
            if record is None:
                return None
            for key, value in updates.items():
                if key in TEMPLATE_UPDATABLE_FIELDS:
                    setattr(record, key, value)
            session.flush()
            return self._to_template(record)

    def delete_template(self, template_id: str) -> bool:
        with self._session("delete_template") as session:
            record = session.get(AITemplateRecord, template_id)
            if record is None:
                return False
            session.delete(record)
            return True

    # Logs

    def append_generation_log(self, entry: GenerationLogEntry) -> GenerationLogEntry:
        with self._session("append_generation_log") as session:
            record = AIGenerationLogRecord(
                id=entry.id or new_id(),
                user_id=entry.user_id,
                provider=entry.provider,
                model_name=entry.model_name,
                prompt=entry.prompt,
                response=entry.response,
                tokens_used=entry.tokens_used,
                request_type=entry.request_type,
                success=entry.success,
                error_message=entry.error_message,
                created_at=entry.created_at
            )
            session.add(record)
            session.flush()
            return self._to_generation_log(record)

    def query_generation_logs(self, user_id, limit=None, newest_first=True) -> List[GenerationLogEntry]:
        order = AIGenerationLogRecord.created_at.desc() if newest_first else AIGenerationLogRecord.created_at.asc()
        query = select(AIGenerationLogRecord).where(AIGenerationLogRecord.user_id == user_id).order_by(order)
        if limit is not None:
            query = query.limit(limit)

        with self._session("query_generation_logs") as session:
            return [self._to_generation_log(r) for r in session.scalars(query).all()]

    def append_chat_log(self, entry: ChatLogEntry) -> ChatLogEntry:
        with self._session("append_chat_log") as session:
            record = AIChatLogRecord(
                id=entry.id or new_id(),
                user_id=entry.user_id,
                provider=entry.provider,
                model_name=entry.model_name,
                messages=[{'role': m.role.value, 'content': m.content} for m in entry.messages],
                response=entry.response,
                tokens_used=entry.tokens_used,
                created_at=entry.created_at
            )
            session.add(record)
            session.flush()
            return self._to_chat_log(record)

    def query_chat_logs(self, user_id, limit=None) -> List[ChatLogEntry]:
        query = (
            select(AIChatLogRecord)
            .where(AIChatLogRecord.user_id == user_id)
            .order_by(AIChatLogRecord.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)

        with self._session("query_chat_logs") as session:
            return [self._to_chat_log(r) for r in session.scalars(query).all()]

    def append_error_log(self, entry: ErrorLogEntry) -> ErrorLogEntry:
        with self._session("append_error_log") as session:
            record = AIErrorLogRecord(
                id=entry.id or new_id(),
                user_id=entry.user_id,
                operation=entry.operation,
                error_message=entry.error_message,
                context=dict(entry.context),
                created_at=entry.created_at
            )
            session.add(record)
            session.flush()
            return self._to_error_log(record)

    def query_error_logs(self, user_id, limit=None) -> List[ErrorLogEntry]:
        query = (
            select(AIErrorLogRecord)
            .where(AIErrorLogRecord.user_id == user_id)
            .order_by(AIErrorLogRecord.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)

        with self._session("query_error_logs") as session:
            return [self._to_error_log(r) for r in session.scalars(query).all()]
