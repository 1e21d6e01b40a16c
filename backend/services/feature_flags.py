"""
Runtime settings for the RFQ builder backend.

Read once from the environment at import time. Defaults suit local dev.
"""
import os


# Fixed delay for the simulated "save draft" / "save as template" calls
SIMULATED_SAVE_DELAY_SECONDS = float(os.getenv("SIMULATED_SAVE_DELAY_SECONDS", "1.5"))

# Log every first-time section completion
ENABLE_COMPLETION_LOGS = os.getenv("ENABLE_COMPLETION_LOGS", "true").lower() == "true"

# Sender details substituted into emails rendered for real suppliers
COMPANY_NAME = os.getenv("COMPANY_NAME", "")
CONTACT_EMAIL = os.getenv("CONTACT_EMAIL", "")
PHONE_NUMBER = os.getenv("PHONE_NUMBER", "")


def company_values() -> dict:
    """Sender variables for email rendering; empty values are skipped later."""
    return {
        "COMPANY_NAME": COMPANY_NAME,
        "CONTACT_EMAIL": CONTACT_EMAIL,
        "PHONE_NUMBER": PHONE_NUMBER,
    }
