# ============================================================================
# src/auto_centile/constants/growth.py
# ============================================================================
"""
Growth Calculation Constants
- External calculator endpoint
- Term gestation defaults
- Conventional form field names
- Display precision
"""

# RCPCH UK-WHO calculation endpoint
DEFAULT_GROWTH_API_URL = "https://api.rcpch.ac.uk/growth/v1/uk-who/calculation"

# Term birth, used when gestation is absent or not numeric
DEFAULT_GESTATION_WEEKS = 40
DEFAULT_GESTATION_DAYS = 0

# Field role -> conventional form field name
DEFAULT_FIELD_NAMES = {
    "weight": "weight_kg",
    "height": "height_cm",
    "dob": "date_of_birth",
    "sex": "sex",
    "measurement_date": "measurement_date",
    "gestation_weeks": "gestation_weeks",
    "gestation_days": "gestation_days",
    "weight_centile": "weight_centile",
    "height_centile": "height_centile",
    "bmi_centile": "bmi_centile",
    "weight_sds": "weight_sds",
    "height_sds": "height_sds",
    "bmi_sds": "bmi_sds",
}

# Metrics written back into the form: metric -> (centile role, sds role)
RESULT_FIELD_ROLES = {
    "weight": ("weight_centile", "weight_sds"),
    "height": ("height_centile", "height_sds"),
    "bmi": ("bmi_centile", "bmi_sds"),
}

DEFAULT_BMI_DISPLAY_FIELD = "bmi_calculated"

BMI_DECIMALS = 2
CENTILE_DECIMALS = 1
SDS_DECIMALS = 2
