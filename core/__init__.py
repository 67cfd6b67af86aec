# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: Validation rules and persistence for each resource
#
# Code in this package should NOT define routes or read HTTP requests.
# This keeps the logic testable and reusable.
# =============================================================================
