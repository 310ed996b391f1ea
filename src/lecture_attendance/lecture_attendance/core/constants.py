"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STUDENT_ID_MAX_LENGTH = 8
# Display months are always English, whatever LC_TIME says.
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
UNAUTHORIZED_MESSAGE = "UNAUTHORIZED"
LECTURE_CREATE_FAILED_MESSAGE = "Failed to create lecture"
NOT_IMPLEMENTED_MESSAGE = "Not implemented yet"
