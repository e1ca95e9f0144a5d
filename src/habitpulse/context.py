"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ContextManager, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .services.habits import HabitService
from .state import HabitForm, HabitListState


@dataclass
class AppContext:
    """Owns the storage handle and everything built on top of it."""

    config: BaseConfig
    engine: Engine
    session_factory: Callable[[], ContextManager[Session]]

    habit_gateway: SQLModelHabitRepository
    habit_repo: HabitService

    habit_form: HabitForm
    habit_list: HabitListState

    # True when start-up had to create the store from scratch
    schema_rebuilt: bool = False

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine, session_factory, rebuilt = bootstrap_database(config)

    habit_gateway = SQLModelHabitRepository(session_factory)
    habit_repo = HabitService(habit_gateway)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_gateway=habit_gateway,
        habit_repo=habit_repo,
        habit_form=HabitForm(habit_repo),
        habit_list=HabitListState(habit_repo),
        schema_rebuilt=rebuilt,
    )
