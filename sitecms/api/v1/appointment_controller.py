"""
Appointment Controller
======================

Admin endpoints for activities, weekly availability and appointments.
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from sitecms.api.v1.dependencies import get_appointment_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.appointment_dto import (
    ActivityCreateRequest,
    ActivityResponse,
    ActivityUpdateRequest,
    AppointmentResponse,
    AvailabilityExceptionDto,
    AvailabilityRequest,
    AvailabilityResponse,
    CalendarEventResponse,
    ClientInfoDto,
    ReminderSettingsDto,
    RequiredFieldsDto,
    WeeklySlotDto,
)
from sitecms.application.dto.auth_dto import StatusResponse
from sitecms.application.services.appointment_service import AppointmentService
from sitecms.core.errors import ConcurrencyError, NotFoundError
from sitecms.domain.models.activity import Activity, ReminderSettings, RequiredFieldsConfig
from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.availability import Availability, AvailabilityException, WeeklySlot
from sitecms.utils.datetime_utils import local

activities_router = APIRouter(tags=["activities"], dependencies=[Depends(require_admin)])
availability_router = APIRouter(tags=["availability"], dependencies=[Depends(require_admin)])
appointments_router = APIRouter(tags=["appointments"], dependencies=[Depends(require_admin)])


# Conversions

def required_fields_dto(config: RequiredFieldsConfig) -> RequiredFieldsDto:
    return RequiredFieldsDto(fields=list(config.fields), custom_field_label=config.custom_field_label)


def activity_response(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        name=activity.name,
        duration_minutes=activity.duration_minutes,
        color=activity.color,
        price=activity.price,
        description=activity.description,
        required_fields=required_fields_dto(activity.required_fields),
        reminder_settings=ReminderSettingsDto(
            enabled=activity.reminder_settings.enabled,
            hours_before=activity.reminder_settings.hours_before,
        ),
        minimum_booking_notice_hours=activity.minimum_booking_notice_hours,
        created_at=activity.created_at,
        updated_at=activity.updated_at,
    )


def client_info_dto(appointment: Appointment) -> ClientInfoDto:
    client = appointment.client_info
    return ClientInfoDto(
        name=client.name,
        email=client.email,
        phone=client.phone,
        address=client.address,
        custom_field=client.custom_field,
        notes=client.notes,
    )


def appointment_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        activity_id=appointment.activity_id,
        activity_name=appointment.activity_name,
        activity_duration_minutes=appointment.activity_duration_minutes,
        client_info=client_info_dto(appointment),
        date_time=appointment.date_time,
        end_date_time=appointment.end_date_time,
        status=appointment.status.value,
        version=appointment.version,
        reminder_sent=appointment.reminder_sent,
        created_at=appointment.created_at,
        updated_at=appointment.updated_at,
    )


def availability_response(availability: Availability) -> AvailabilityResponse:
    return AvailabilityResponse(
        weekly_slots=[
            WeeklySlotDto(day_of_week=slot.day_of_week, start_time=slot.start_time, end_time=slot.end_time)
            for slot in availability.weekly_slots
        ],
        exceptions=[
            AvailabilityExceptionDto(
                start_date=exception.start_date,
                end_date=exception.end_date,
                start_time=exception.start_time,
                end_time=exception.end_time,
                reason=exception.reason,
            )
            for exception in availability.exceptions
        ],
    )


def activity_fields(request) -> dict:
    """Domain keyword arguments from an activity create/update request (set fields only)."""
    fields = request.model_dump(exclude_unset=True, exclude={"required_fields", "reminder_settings"})
    if request.required_fields is not None:
        fields["required_fields"] = RequiredFieldsConfig(
            fields=tuple(request.required_fields.fields),
            custom_field_label=request.required_fields.custom_field_label,
        )
    if request.reminder_settings is not None:
        fields["reminder_settings"] = ReminderSettings(
            enabled=request.reminder_settings.enabled,
            hours_before=request.reminder_settings.hours_before,
        )
    return fields


# Activities

@activities_router.get("", response_model=List[ActivityResponse], summary="List activities")
async def list_activities(
    service: AppointmentService = Depends(get_appointment_service),
) -> List[ActivityResponse]:
    return [activity_response(activity) for activity in service.list_activities()]


@activities_router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an activity",
)
async def create_activity(
    request: ActivityCreateRequest,
    service: AppointmentService = Depends(get_appointment_service),
) -> ActivityResponse:
    try:
        activity = service.create_activity(**activity_fields(request))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return activity_response(activity)


@activities_router.get("/{activity_id}", response_model=ActivityResponse, summary="Get an activity")
async def get_activity(
    activity_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> ActivityResponse:
    try:
        return activity_response(service.get_activity(activity_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@activities_router.put("/{activity_id}", response_model=ActivityResponse, summary="Update an activity")
async def update_activity(
    activity_id: str,
    request: ActivityUpdateRequest,
    service: AppointmentService = Depends(get_appointment_service),
) -> ActivityResponse:
    try:
        activity = service.update_activity(activity_id, activity_fields(request))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return activity_response(activity)


@activities_router.delete(
    "/{activity_id}",
    response_model=StatusResponse,
    summary="Delete an activity",
    description="Refused while the activity has upcoming pending or confirmed appointments.",
)
async def delete_activity(
    activity_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> StatusResponse:
    try:
        service.delete_activity(activity_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return StatusResponse(status="deleted")


# Availability

@availability_router.get("", response_model=AvailabilityResponse, summary="Get weekly availability")
async def get_availability(
    service: AppointmentService = Depends(get_appointment_service),
) -> AvailabilityResponse:
    return availability_response(service.get_availability())


@availability_router.put(
    "",
    response_model=AvailabilityResponse,
    summary="Replace weekly availability",
    description="Replace all weekly slots and exceptions. Slots of the same day must not overlap.",
)
async def update_availability(
    request: AvailabilityRequest,
    service: AppointmentService = Depends(get_appointment_service),
) -> AvailabilityResponse:
    try:
        slots = [
            WeeklySlot(day_of_week=slot.day_of_week, start_time=slot.start_time, end_time=slot.end_time)
            for slot in request.weekly_slots
        ]
        exceptions = [
            AvailabilityException(
                start_date=exception.start_date,
                end_date=exception.end_date or exception.start_date,
                reason=exception.reason,
                start_time=exception.start_time,
                end_time=exception.end_time,
            )
            for exception in request.exceptions
        ]
        availability = service.update_availability(slots, exceptions)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return availability_response(availability)


# Appointments

@appointments_router.get(
    "",
    response_model=List[AppointmentResponse],
    summary="List appointments in a date range",
)
async def list_appointments(
    start: datetime,
    end: datetime,
    service: AppointmentService = Depends(get_appointment_service),
) -> List[AppointmentResponse]:
    try:
        appointments = service.list_appointments(local(start), local(end))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [appointment_response(appointment) for appointment in appointments]


@appointments_router.get(
    "/calendar",
    response_model=List[CalendarEventResponse],
    summary="Calendar events in a date range",
)
async def get_calendar_events(
    start: datetime,
    end: datetime,
    service: AppointmentService = Depends(get_appointment_service),
) -> List[CalendarEventResponse]:
    try:
        events = service.get_calendar_events(local(start), local(end))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [CalendarEventResponse(**event) for event in events]


@appointments_router.get("/{appointment_id}", response_model=AppointmentResponse, summary="Get an appointment")
async def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentResponse:
    try:
        return appointment_response(service.get_appointment(appointment_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@appointments_router.post(
    "/{appointment_id}/confirm",
    response_model=AppointmentResponse,
    summary="Confirm an appointment",
    description="Confirm a pending appointment and send the confirmation email to the client.",
)
async def confirm_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentResponse:
    try:
        appointment = service.confirm_appointment(appointment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConcurrencyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return appointment_response(appointment)


@appointments_router.post(
    "/{appointment_id}/cancel",
    response_model=AppointmentResponse,
    summary="Cancel an appointment",
    description="Cancel a pending or confirmed appointment and notify the client.",
)
async def cancel_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentResponse:
    try:
        appointment = service.cancel_appointment(appointment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConcurrencyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return appointment_response(appointment)


@appointments_router.delete("/{appointment_id}", response_model=StatusResponse, summary="Delete an appointment")
async def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
) -> StatusResponse:
    try:
        service.delete_appointment(appointment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StatusResponse(status="deleted")
