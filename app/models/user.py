from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class WeekDay(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


TIME_FORMATS = (12, 24)


def _check_time_format(value: Optional[int]) -> Optional[int]:
    if value is not None and value not in TIME_FORMATS:
        raise ValueError("time_format must be 12 or 24")
    return value


class UserBase(SQLModel):
    name: Optional[str] = None
    email: str = Field(index=True, unique=True)
    username: Optional[str] = Field(default=None, index=True, unique=True)
    bio: Optional[str] = None
    time_zone: str = "Europe/London"
    week_start: WeekDay = WeekDay.SUNDAY
    theme: Optional[Theme] = None
    default_schedule_id: Optional[int] = None
    locale: Optional[str] = None
    time_format: Optional[int] = 12
    allow_dynamic_booking: bool = True
    role: Role = Role.USER


class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    avatar: Optional[str] = None
    password: Optional[str] = None  # bcrypt hash

    created_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserCreate(UserBase):
    """Body accepted by the admin ``add`` operation."""

    @field_validator("time_format")
    @classmethod
    def check_time_format(cls, value):
        return _check_time_format(value)


class UserUpdate(SQLModel):
    """Partial body accepted by the admin ``update`` operation.

    Only keys present in the payload are written; read them back with
    ``model_dump(exclude_unset=True)``.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = None
    time_zone: Optional[str] = None
    week_start: Optional[WeekDay] = None
    theme: Optional[Theme] = None
    default_schedule_id: Optional[int] = None
    locale: Optional[str] = None
    time_format: Optional[int] = None
    allow_dynamic_booking: Optional[bool] = None
    role: Optional[Role] = None

    @field_validator("time_format")
    @classmethod
    def check_time_format(cls, value):
        return _check_time_format(value)

    @field_validator("email", "time_zone", "week_start", "allow_dynamic_booking", "role", mode="before")
    @classmethod
    def reject_null(cls, value):
        # defaults are not validated, so this only fires on an explicit null
        if value is None:
            raise ValueError("field cannot be null")
        return value
