# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Gestor Financeiro API:
# - test_models.py: Pydantic model and YearMonth validation
# - test_security.py: bcrypt hashes and access tokens
# - test_chart_service.py: Bar/pie chart aggregation
# - test_*_service.py: Business rules of each service
# - test_auth.py: Bearer token and admin dependencies
# - test_api.py: Endpoints through the TestClient
#
# Run tests with: pytest
# =============================================================================
