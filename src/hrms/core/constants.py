"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EMPLOYEE_ID_PREFIX = "EMP"
EMPLOYEE_ID_MIN_DIGITS = 3
EMPLOYEE_ID_SEQUENCE = "employee"
EMPLOYEE_ID_MAX_ATTEMPTS = 3

MIN_NAME_LENGTH = 2
MIN_LEAVE_REASON_LENGTH = 5

RECENT_LEAVE_ACTIVITIES = 3
RECENT_PAYROLL_ACTIVITIES = 2
RECENT_ACTIVITY_LIMIT = 5

API_VERSION = "1.0.0"

# DECIMAL(10,2) money columns
MAX_MONEY_AMOUNT = "99999999.99"
