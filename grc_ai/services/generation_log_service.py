# grc_ai/services/generation_log_service.py

"""
Outcome Logger & Statistics

Append-only audit trail of generations, chat interactions and errors.
Writing a log entry never fails the request it describes.
"""

import json
import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from ..base.exceptions import PersistenceError
from ..base.models import (
    ChatLogEntry, ChatMessage, ErrorLogEntry, GenerationLogEntry,
    GenerationRequest, GenerationResult, GenerationStats
)

if TYPE_CHECKING:
    from database.repository import AIRepository

logger = logging.getLogger(__name__)

LOCAL_USER = "local"
DEFAULT_LOG_LIMIT = 50


def _most_common(values: Iterable[str]) -> str:
    """Most frequent value; on a tie the one seen first wins."""
    counts = Counter(values)
    if not counts:
        return ""
    # Counter preserves insertion order and max() keeps the first maximum
    return max(counts, key=counts.get)


def _response_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content)


class GenerationLogService:
    """Records outcomes and derives per-user statistics."""

    def __init__(self, repository: 'AIRepository'):
        self.repository = repository

    def log_generation(self, request: GenerationRequest, result: GenerationResult) -> Optional[GenerationLogEntry]:
        entry = GenerationLogEntry(
            user_id=request.user_id or LOCAL_USER,
            provider=request.provider,
            model_name=request.model,
            prompt=request.prompt,
            response=_response_text(result.content),
            tokens_used=result.tokens_used or 0,
            request_type=request.content_type_value,
            success=result.success,
            error_message=result.error
        )
        try:
            return self.repository.append_generation_log(entry)
        except PersistenceError as e:
            logger.error(f"Error logging AI generation: {e}")
            return None

    def log_chat_interaction(
        self,
        user_id: Optional[str],
        provider: str,
        model: str,
        messages: List[ChatMessage],
        response: str,
        tokens_used: Optional[int] = None
    ) -> Optional[ChatLogEntry]:
        entry = ChatLogEntry(
            user_id=user_id or LOCAL_USER,
            provider=provider,
            model_name=model,
            messages=tuple(messages),
            response=response,
            tokens_used=tokens_used or 0
        )
        try:
            return self.repository.append_chat_log(entry)
        except PersistenceError as e:
            logger.error(f"Error logging AI chat interaction: {e}")
            return None

    def log_error(
        self,
        user_id: Optional[str],
        operation: str,
        error: str,
        context: Optional[Dict[str, Any]] = None
    ) -> Optional[ErrorLogEntry]:
        entry = ErrorLogEntry(
            user_id=user_id or LOCAL_USER,
            operation=operation,
            error_message=error,
            context=dict(context or {})
        )
        try:
            return self.repository.append_error_log(entry)
        except PersistenceError as e:
            logger.error(f"Error logging AI error: {e}")
            return None

    def get_generation_logs(self, user_id: str, limit: int = DEFAULT_LOG_LIMIT) -> List[GenerationLogEntry]:
        try:
            return self.repository.query_generation_logs(user_id, limit=limit)
        except PersistenceError as e:
            logger.error(f"Error fetching AI generation logs: {e}")
            return []

    def get_chat_logs(self, user_id: str, limit: int = DEFAULT_LOG_LIMIT) -> List[ChatLogEntry]:
        try:
            return self.repository.query_chat_logs(user_id, limit=limit)
        except PersistenceError as e:
            logger.error(f"Error fetching AI chat logs: {e}")
            return []

    def get_error_logs(self, user_id: str, limit: int = DEFAULT_LOG_LIMIT) -> List[ErrorLogEntry]:
        try:
            return self.repository.query_error_logs(user_id, limit=limit)
        except PersistenceError as e:
            logger.error(f"Error fetching AI error logs: {e}")
            return []

    def get_generation_stats(self, user_id: str) -> GenerationStats:
        try:
            entries = self.repository.query_generation_logs(user_id, newest_first=False)
        except PersistenceError as e:
            logger.error(f"Error fetching AI generation stats: {e}")
            return GenerationStats()

        if not entries:
            return GenerationStats()

        total = len(entries)
        successful = sum(1 for e in entries if e.success)
        total_tokens = sum(e.tokens_used or 0 for e in entries)

        return GenerationStats(
            total_generations=total,
            successful_generations=successful,
            failed_generations=total - successful,
            average_tokens_used=total_tokens / total,
            most_used_provider=_most_common(e.provider for e in entries),
            most_used_field_type=_most_common(e.request_type for e in entries)
        )
