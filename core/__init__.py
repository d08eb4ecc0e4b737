# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic behind the routes:
# - models/: Pydantic schemas for data validation
# - services/: Operations against the MongoDB collections
#
# Services take the database handle in their constructor and never reach
# for module-level globals.
# =============================================================================
