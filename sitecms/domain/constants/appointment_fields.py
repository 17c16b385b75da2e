"""Constants for Activity, Appointment and Availability field names"""


class ActivityFields:
    """Field name constants for Activity model"""
    ID = "_id"
    NAME = "name"
    DESCRIPTION = "description"
    DURATION_MINUTES = "duration_minutes"
    COLOR = "color"
    PRICE = "price"
    REQUIRED_FIELDS = "required_fields"
    REMINDER_SETTINGS = "reminder_settings"
    MINIMUM_BOOKING_NOTICE_HOURS = "minimum_booking_notice_hours"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class AppointmentFields:
    """Field name constants for Appointment model"""
    ID = "_id"
    ACTIVITY_ID = "activity_id"
    ACTIVITY_NAME = "activity_name"
    ACTIVITY_DURATION_MINUTES = "activity_duration_minutes"
    CLIENT_INFO = "client_info"
    DATE_TIME = "date_time"
    END_DATE_TIME = "end_date_time"
    STATUS = "status"
    VERSION = "version"
    REMINDER_SENT = "reminder_sent"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class AvailabilityFields:
    """Field name constants for the Availability singleton document"""
    ID = "_id"
    WEEKLY_SLOTS = "weekly_slots"
    EXCEPTIONS = "exceptions"
    UPDATED_AT = "updated_at"

    # The schedule is a single document
    SINGLETON_ID = "availability"
