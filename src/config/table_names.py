from enum import Enum


class TableNames(str, Enum):
    ATTENDEES = "attendees"
    RSVP_LOGS = "rsvp_logs"
    EMAIL_LOGS = "email_logs"
