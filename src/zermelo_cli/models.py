"""Pydantic models for sessions, credentials and appointments.

All data structures use Pydantic v2 for validation, serialization, and type
safety. Appointment fields are individually optional: None means the service
did not send the field, which is not the same as False or 0.
"""

from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Resolved school and access token authorizing an appointment fetch."""

    model_config = ConfigDict(frozen=True)

    school: str
    access_token: str


class ConfigDerived(BaseModel):
    """Config file already holds a durable access token."""

    model_config = ConfigDict(frozen=True)

    school: str
    access_token: str
    config_path: Path


class ConfigDerivedPending(BaseModel):
    """Config file holds a temporary auth code that still has to be exchanged."""

    model_config = ConfigDict(frozen=True)

    school: str
    auth_code: str
    config_path: Path


class DirectAuthCode(BaseModel):
    """Auth code and school given on the command line."""

    model_config = ConfigDict(frozen=True)

    school: str
    auth_code: str


class DirectAccessToken(BaseModel):
    """Access token and school given on the command line."""

    model_config = ConfigDict(frozen=True)

    school: str
    access_token: str


Credentials = Union[ConfigDerived, ConfigDerivedPending, DirectAuthCode, DirectAccessToken]


class AppointmentType(str, Enum):
    """Appointment kinds known to the Zermelo API."""

    UNKNOWN = "unknown"
    LESSON = "lesson"
    EXAM = "exam"
    ACTIVITY = "activity"
    CHOICE = "choice"
    TALK = "talk"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "AppointmentType":
        """Map a raw type string to an AppointmentType.

        Absent or unrecognised values become OTHER.
        """
        if value is None:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class Appointment(BaseModel):
    """One scheduled lesson or event returned by the Zermelo API.

    Wire keys are camelCase (startTimeSlot, type, ...); snake_case names are
    accepted too so appointments can be built directly in code.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    start_time_slot: int | None = Field(default=None, alias="startTimeSlot")
    end_time_slot: int | None = Field(default=None, alias="endTimeSlot")
    start: int | None = None  # epoch seconds
    end: int | None = None  # epoch seconds
    subjects: list[str] | None = None
    teachers: list[str] | None = None
    locations: list[str] | None = None
    groups: list[str] | None = None
    remark: str | None = None
    appointment_type: str | None = Field(default=None, alias="type")
    cancelled: bool | None = None
    valid: bool | None = None
    modified: bool | None = None
    new: bool | None = None
    moved: bool | None = None

    @property
    def kind(self) -> AppointmentType:
        """Parsed appointment type, OTHER when absent or unknown."""
        return AppointmentType.parse(self.appointment_type)
