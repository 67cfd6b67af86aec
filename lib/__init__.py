# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - security.py: bcrypt password hashes and JWT access tokens
# - utils.py: Shared utilities (UUID normalization, money conversion)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_blank, money_to_db, normalize_uuid, to_decimal

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "is_blank",
    "money_to_db",
    "normalize_uuid",
    "to_decimal",
]
