"""
Appointment DTO
===============

Pydantic models for activities, availability, bookings and the admin
calendar.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequiredFieldsDto(BaseModel):
    fields: List[str] = Field(
        default_factory=lambda: ["name", "email"],
        description="Subset of name, email, phone, address, custom (name and email are always included)",
    )
    custom_field_label: Optional[str] = Field(None, description="Label of the custom field, required with 'custom'")


class ReminderSettingsDto(BaseModel):
    enabled: bool = True
    hours_before: int = Field(24, description="Hours before the appointment (1-168)")


class ActivityCreateRequest(BaseModel):
    name: str
    duration_minutes: int = Field(..., description="Length of one appointment")
    color: str = Field("#3b82f6", description="Calendar color")
    price: float = 0.0
    description: Optional[str] = None
    required_fields: Optional[RequiredFieldsDto] = None
    reminder_settings: Optional[ReminderSettingsDto] = None
    minimum_booking_notice_hours: int = Field(0, description="How far in advance bookings must be made")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Massage",
                "duration_minutes": 60,
                "color": "#10b981",
                "price": 55.0,
                "required_fields": {"fields": ["name", "email", "phone"]},
                "reminder_settings": {"enabled": True, "hours_before": 24},
                "minimum_booking_notice_hours": 2,
            }
        }
    )


class ActivityUpdateRequest(BaseModel):
    name: Optional[str] = None
    duration_minutes: Optional[int] = None
    color: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    required_fields: Optional[RequiredFieldsDto] = None
    reminder_settings: Optional[ReminderSettingsDto] = None
    minimum_booking_notice_hours: Optional[int] = None


class ActivityResponse(BaseModel):
    id: str
    name: str
    duration_minutes: int
    color: str
    price: float
    description: Optional[str] = None
    required_fields: RequiredFieldsDto
    reminder_settings: ReminderSettingsDto
    minimum_booking_notice_hours: int
    created_at: datetime
    updated_at: datetime


class WeeklySlotDto(BaseModel):
    day_of_week: int = Field(..., description="0 = Sunday ... 6 = Saturday")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")


class AvailabilityExceptionDto(BaseModel):
    start_date: date
    end_date: Optional[date] = Field(None, description="Defaults to start_date")
    start_time: Optional[str] = Field(None, description="HH:MM; omit for whole days")
    end_time: Optional[str] = None
    reason: Optional[str] = None


class AvailabilityRequest(BaseModel):
    weekly_slots: List[WeeklySlotDto] = Field(default_factory=list)
    exceptions: List[AvailabilityExceptionDto] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "weekly_slots": [
                    {"day_of_week": 1, "start_time": "09:00", "end_time": "12:00"},
                    {"day_of_week": 1, "start_time": "14:00", "end_time": "18:00"},
                ],
                "exceptions": [
                    {"start_date": "2026-12-24", "end_date": "2026-12-26", "reason": "Christmas"},
                ],
            }
        }
    )


class AvailabilityResponse(BaseModel):
    weekly_slots: List[WeeklySlotDto]
    exceptions: List[AvailabilityExceptionDto]


class ClientInfoDto(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    custom_field: Optional[str] = None
    notes: Optional[str] = None


class AppointmentCreateRequest(BaseModel):
    """DTO for a public booking."""
    activity_id: str
    client_info: ClientInfoDto
    date_time: datetime = Field(..., description="Start of the appointment, ISO 8601 with offset")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "activity_id": "5b0f7c1e-2b61-4d8c-9d55-0d4b3c3f6a11",
                "client_info": {"name": "Marie Dupont", "email": "marie@example.com", "phone": "0612345678"},
                "date_time": "2026-11-02T10:00:00+01:00",
            }
        }
    )


class AppointmentResponse(BaseModel):
    id: str
    activity_id: str
    activity_name: str
    activity_duration_minutes: int
    client_info: ClientInfoDto
    date_time: datetime
    end_date_time: datetime
    status: str
    version: int
    reminder_sent: bool
    created_at: datetime
    updated_at: datetime


class TimeSlotResponse(BaseModel):
    start_time: str
    end_time: str


class CalendarEventResponse(BaseModel):
    id: str
    title: str
    start: str
    end: str
    color: str
    extended_props: Dict[str, Any]


class PublicActivityResponse(BaseModel):
    """Activity as shown on the booking page."""
    id: str
    name: str
    duration_minutes: int
    color: str
    price: float
    description: Optional[str] = None
    required_fields: RequiredFieldsDto
    minimum_booking_notice_hours: int
