# grc_ai/factory.py

"""
Dependency root.

Builds the repository, backend adapters and services from settings and
wires them into an AIOrchestrator. The caller owns the returned
orchestrator and must ``await orchestrator.close()``.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import aiohttp

from config import Settings, get_settings
from .base.interfaces import BaseBackend
from .chat_adapter import ChatAdapter
from .config.provider_catalog import LOCAL_PROVIDER_ID, ProviderCatalog
from .orchestrator import AIOrchestrator
from .prompt_builder import PromptBuilder
from .prompt_templates import TemplateCatalog, load_templates_from_yaml
from .providers import build_backend_registry
from .services.configuration_service import ConfigurationService
from .services.generation_log_service import GenerationLogService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "templates" / "default_templates.yaml"


def configure_logging(settings: Optional[Settings] = None):
    """Configure logging to output to the console and, when enabled, to a file."""
    settings = settings or get_settings()

    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIRECTORY)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "grc_ai.log", mode='a')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def build_repository(settings: Settings):
    """SQLAlchemy repository when DATABASE_URL is set, otherwise in-memory storage."""
    # Imported here: the database package depends on grc_ai.base
    from database import InMemoryRepository, SQLAlchemyRepository, build_engine, build_session_factory, create_tables

    if not settings.DATABASE_URL:
        logger.info("No DATABASE_URL configured, using in-memory storage")
        return InMemoryRepository()

    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG")
    create_tables(engine)
    return SQLAlchemyRepository(build_session_factory(engine))


def build_backends(settings: Settings, session: Optional[aiohttp.ClientSession] = None) -> Dict[str, BaseBackend]:
    backends = build_backend_registry(settings, session=session)
    logger.info(f"Registered backends: {', '.join(backends)}")
    return backends


def create_orchestrator(
    settings: Optional[Settings] = None,
    repository=None,
    backends: Optional[Dict[str, BaseBackend]] = None
) -> AIOrchestrator:
    """
    Create a fully wired orchestrator.

    Args:
        settings: Application settings; defaults to ``get_settings()``
        repository: Persistence collaborator; built from settings when omitted
        backends: Backend adapters keyed by provider id; built from settings when omitted
    """
    settings = settings or get_settings()
    repository = repository if repository is not None else build_repository(settings)
    backends = backends if backends is not None else build_backends(settings)

    catalog = ProviderCatalog()
    local_backend = backends.get(LOCAL_PROVIDER_ID)
    if local_backend is not None:
        catalog.register_model_lister(LOCAL_PROVIDER_ID, local_backend.list_models)

    template_catalog = TemplateCatalog(repository)
    if settings.TEMPLATE_SEED_PATH:
        created = template_catalog.seed_templates(load_templates_from_yaml(settings.TEMPLATE_SEED_PATH))
        logger.info(f"Seeded {created} templates from {settings.TEMPLATE_SEED_PATH}")

    return AIOrchestrator(
        catalog=catalog,
        configuration_service=ConfigurationService(repository, settings),
        template_catalog=template_catalog,
        prompt_builder=PromptBuilder(template_catalog, settings),
        backends=backends,
        chat_adapter=ChatAdapter(backends),
        log_service=GenerationLogService(repository),
        settings=settings
    )
