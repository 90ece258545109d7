from enum import Enum


class MessageKind(Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "doc"
    CREATE_GROUP = "create_group"


class ContactKind(Enum):
    NUMBERS = "numbers"
    GROUP = "group"


class RejectionReason(Enum):
    MISSING_FIELD = "missing_field"
    MALFORMED_RECIPIENT = "malformed_recipient"
    TEXT_TOO_LONG = "text_too_long"
    MEDIA_NOT_FOUND = "media_not_found"
    MEDIA_UNAVAILABLE = "media_unavailable"
    MEDIA_TOO_LARGE = "media_too_large"
    MEDIA_TYPE = "media_type"
    MISSING_TIMEZONE = "missing_timezone"
