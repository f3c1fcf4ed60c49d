"""
Runtime configuration for the business dashboard backend.

All settings are read from environment variables once at import time.
"""
import os
import secrets

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./dashboard.db")
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Authentication
SECRET_KEY = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24 hours default

# The single account that resolves to the admin role
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com").strip().lower()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

# HTTP
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# Reports
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Business rules
MIN_PASSWORD_LENGTH = 6
PLAN_DURATION_DAYS = 365
PLAN_EXPIRING_SOON_DAYS = 30
