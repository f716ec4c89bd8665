"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_ROLE_NAME_LENGTH = 100
MAX_PERMISSION_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255

# The authorization_config table holds a single row with this id
AUTHORIZATION_CONFIG_ID = 1

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
