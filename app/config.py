import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./patient_portal.db")

# Supabase Auth Configuration
SUPABASE_URL = os.getenv("SUPABASE_URL", "http://localhost:54321")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
# Audience claim Supabase puts on access tokens for signed-in users
SUPABASE_JWT_AUDIENCE = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")

# Security - CRITICAL: No default JWT secret in production
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
if not SUPABASE_JWT_SECRET:
    import warnings

    warnings.warn(
        "SUPABASE_JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    SUPABASE_JWT_SECRET = "INSECURE-DEV-JWT-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Appointment slots are generated in the clinic's local wall-clock time
CLINIC_TIMEZONE = os.getenv("CLINIC_TIMEZONE", "UTC")

# Frontend base URL (used for CORS and CSP frame-ancestors)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
