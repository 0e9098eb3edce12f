"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import BaseConfig
from .infra.cache import RepositoryCache
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelCategoryRepository, SQLModelTransactionRepository
from .services.seed import seed_default_categories
from .services.statistics import StatisticsService


@dataclass
class AppContext:
    """Everything one application session shares: config, storage, services."""

    config: BaseConfig
    engine: Engine
    session_factory: Callable[[], Session]
    cache: RepositoryCache
    transaction_repo: SQLModelTransactionRepository
    category_repo: SQLModelCategoryRepository
    statistics: StatisticsService

    def dispose(self) -> None:
        self.cache.clear()
        self.engine.dispose()


def create_app_context(
    config: Optional[BaseConfig] = None, *, cache: Optional[RepositoryCache] = None
) -> AppContext:
    """Create the engine, schema, repositories and services for one session."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    cache = cache if cache is not None else RepositoryCache()
    transaction_repo = SQLModelTransactionRepository(session_factory, cache=cache)
    category_repo = SQLModelCategoryRepository(session_factory, cache=cache)

    if config.SEED_CATEGORIES:
        seed_default_categories(category_repo)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        cache=cache,
        transaction_repo=transaction_repo,
        category_repo=category_repo,
        statistics=StatisticsService(
            transaction_repo,
            category_repo,
            unknown_label=config.UNKNOWN_CATEGORY_LABEL,
        ),
    )
