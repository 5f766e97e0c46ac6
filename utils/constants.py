"""
utils/constants.py

Purpose: Centralized static content

- All user-facing onboarding messages
- Business limits for provider details
- Navigation tab definitions

(Prevents hardcoding across the codebase)
"""

# ============================================================
# FIELD LIMITS
# ============================================================

PHONE_NUMBER_LENGTH = 10

MIN_EXPERIENCE_YEARS = 0
MAX_EXPERIENCE_YEARS = 50

MIN_HOURLY_RATE = 0
MAX_HOURLY_RATE = 10000

DEFAULT_SERVICE_RADIUS_KM = 10

# ============================================================
# VALIDATION MESSAGES
# ============================================================

MESSAGE_MISSING_FIELDS = "Please fill in all fields"

MESSAGE_INVALID_PHONE = "Phone number must be 10 digits"

MESSAGE_MISSING_PROVIDER_DETAILS = "Please complete all provider details"

MESSAGE_INVALID_CATEGORY = "Please select a valid service category"

MESSAGE_INVALID_EXPERIENCE = "Experience must be between 0 and 50 years"

MESSAGE_INVALID_HOURLY_RATE = "Hourly rate must be between ₹0 and ₹10,000"

# ============================================================
# COMMIT / FETCH MESSAGES
# ============================================================

MESSAGE_CATEGORY_FETCH_FAILED = "Could not load service categories"

MESSAGE_PROFILE_UPDATE_FAILED = "Could not update your profile"

MESSAGE_PROVIDER_CREATE_FAILED = "Could not create your service profile"

MESSAGE_USER_UNRESOLVED = "Could not identify the current user"

# ============================================================
# NAVIGATION
# ============================================================

# (route name, tab title)
PROVIDER_TABS = (
    ("provider-home", "Home"),
    ("bookings", "Bookings"),
    ("profile", "Profile"),
)

CUSTOMER_TABS = (
    ("home", "Home"),
    ("search", "Search"),
    ("bookings", "Bookings"),
    ("profile", "Profile"),
)

# ============================================================
# SEED DATA
# ============================================================

DEFAULT_SERVICE_CATEGORIES = (
    ("plumbing", "Plumbing"),
    ("electrical", "Electrical"),
    ("cleaning", "Cleaning"),
    ("carpentry", "Carpentry"),
    ("painting", "Painting"),
    ("appliance-repair", "Appliance Repair"),
    ("pest-control", "Pest Control"),
    ("tutoring", "Tutoring"),
)
