# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Adaptive Fitness API:
# - test_app.py: Health, CORS, 404/500 handling, body parsing, request logging
# - test_config.py: Environment-derived settings
# - test_database.py: Primary -> in-memory -> abort startup sequence
# - test_auth.py: Registration, login, tokens, profile
# - test_sessions.py: Workout sessions and intensity recommendation
# - test_progress.py / test_nutrition.py / test_motivation.py: Route groups
# - test_body.py / test_security.py: Parsing and hashing helpers
#
# Run tests with: pytest
# =============================================================================
