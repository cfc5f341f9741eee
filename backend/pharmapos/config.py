from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Session key holding the cached logged-in user record
    SESSION_USER_KEY = "epos_user"

    # Seed catalog, users and settings from the bundled fixtures
    SEED_FIXTURES = os.environ.get("PHARMAPOS_SEED_FIXTURES", "true").lower() == "true"

    # Overrides the seeded tax_rate setting when present
    DEFAULT_TAX_RATE = os.environ.get("PHARMAPOS_TAX_RATE")

    LOG_LEVEL = os.environ.get("PHARMAPOS_LOG_LEVEL", "INFO")

    # Artificial latency for UX parity only (seconds)
    CHECKOUT_DELAY_SECONDS = float(os.environ.get("PHARMAPOS_CHECKOUT_DELAY", "0"))
    LOGIN_DELAY_SECONDS = float(os.environ.get("PHARMAPOS_LOGIN_DELAY", "0"))

    # Lifetime of two-phase confirmation tokens
    CONFIRMATION_TTL_SECONDS = int(os.environ.get("PHARMAPOS_CONFIRMATION_TTL", "300"))

    BACKUP_FILENAME = "epos_pharma_backup.json"
