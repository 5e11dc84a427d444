"""Constants for the SleepIQ client.

This module contains the constants used throughout the library,
including API endpoints, request settings, and the values accepted
by the bed control operations.
"""

BASE_URL = "https://prod-api.sleepiq.sleepnumber.com/rest"
INSIGHTS_URL = "https://sleepiqapi.azure-api.net/prod"
INSIGHTS_SUBSCRIPTION_KEY = "3c924e14923642baa1c4ad1d5096a1c5"

REQUEST_TIMEOUT = 20.0  # Seconds, applied to every request

ACCEPT_JSON = "application/json"
ACCEPT_INSIGHTS = "application/json, text/javascript, */*; q=0.01"
CONTENT_TYPE_JSON = "application/json"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Bed types
BED_TYPE_SINGLE = 0
BED_TYPE_SPLIT_HEAD = 1
BED_TYPE_SPLIT_KING = 2
BED_TYPE_EASTERN_KING = 3

# Sides of the bed
BED_SIDE_LEFT = 0
BED_SIDE_RIGHT = 1

SIDE_LEFT = "left"
SIDE_RIGHT = "right"
SIDES = (SIDE_LEFT, SIDE_RIGHT)

# Foot warmer temperatures
TEMP_OFF = 0
TEMP_LOW = 31
TEMP_MEDIUM = 57
TEMP_HIGH = 72
FOOT_WARMER_TEMPERATURES = (TEMP_OFF, TEMP_LOW, TEMP_MEDIUM, TEMP_HIGH)
FOOT_WARMER_MIN_DURATION = 1
FOOT_WARMER_MAX_DURATION = 360
FOOT_WARMER_OFF_DURATION = 120

# Bed preset positions
POSITION_FAVORITE = 1
POSITION_READ = 2
POSITION_WATCH_TV = 3
POSITION_FLAT = 4
POSITION_ZERO_G = 5
POSITION_SNORE = 6
PRESET_SPEED = 0

# Underbed lighting levels
LIGHT_LEVEL_LOW = 1
LIGHT_LEVEL_MEDIUM = 30
LIGHT_LEVEL_HIGH = 100
LIGHT_LEVELS = (LIGHT_LEVEL_LOW, LIGHT_LEVEL_MEDIUM, LIGHT_LEVEL_HIGH)
LIGHT_MIN_DURATION = 0
LIGHT_MAX_DURATION = 180  # Minutes
UNDERBED_LIGHT_OUTLET_ID = 3

SLEEP_NUMBER_MIN = 1
SLEEP_NUMBER_MAX = 100

DEFAULT_TIME_LENGTH = "D1"

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}
