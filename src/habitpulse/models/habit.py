"""Habit data structures."""

from __future__ import annotations

import time
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

TITLE_MAX_LENGTH = 200
NOTES_MAX_LENGTH = 2000
PHONE_MAX_LENGTH = 20

# 0 = Monday .. 6 = Sunday
ALL_DAYS: tuple[int, ...] = tuple(range(7))


class RepeatCycle(str, Enum):
    """How often a habit repeats."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


class SupervisionMethod(str, Enum):
    """Who gets told about a habit's progress."""

    LOCAL_NOTIFICATION_ONLY = "LOCAL_NOTIFICATION_ONLY"
    SMS_REPORTING = "SMS_REPORTING"


def now_millis() -> int:
    """Current epoch time in milliseconds."""

    return int(time.time() * 1000)


class Habit(SQLModel, table=True):
    """A recurring habit with its schedule and supervision settings.

    ``repeat_days`` only carries values for weekly habits and
    ``supervisor_phone_numbers`` only for SMS supervision; the edit form
    enforces both when it builds a record.
    """

    __tablename__: ClassVar[str] = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False, max_length=TITLE_MAX_LENGTH)
    repeat_cycle: RepeatCycle = Field(
        default=RepeatCycle.DAILY,
        sa_column=Column(SAEnum(RepeatCycle, name="repeat_cycle"), nullable=False),
    )
    repeat_days: list[int] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    reminder_times: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    notes: str = Field(default="", max_length=NOTES_MAX_LENGTH)
    supervision_method: SupervisionMethod = Field(
        default=SupervisionMethod.LOCAL_NOTIFICATION_ONLY,
        sa_column=Column(SAEnum(SupervisionMethod, name="supervision_method"), nullable=False),
    )
    supervisor_phone_numbers: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    completed: bool = Field(default=False, nullable=False)
    completion_count: int = Field(default=0, nullable=False, ge=0)
    created_date: int = Field(default_factory=now_millis, nullable=False, index=True)

    @property
    def is_persisted(self) -> bool:
        return bool(self.id)
