"""Constants for settings, social network and email log field names"""


class SettingFields:
    """Field name constants for WebsiteSetting documents"""
    KEY = "key"
    VALUE = "value"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"


class SocialNetworkFields:
    """Field name constants for SocialNetwork documents"""
    TYPE = "type"
    URL = "url"
    LABEL = "label"
    ENABLED = "enabled"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"


class EmailLogFields:
    """Field name constants for EmailLog documents"""
    ID = "_id"
    REFERENCE_ID = "reference_id"
    TEMPLATE_TYPE = "template_type"
    RECIPIENT = "recipient"
    SUBJECT = "subject"
    STATUS = "status"
    ERROR_MESSAGE = "error_message"
    SENT_AT = "sent_at"
