# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - database.py: MongoDB connection sequencer (primary -> in-memory fallback)
# - security.py: Password hashing
# - utils.py: ObjectId parsing and UTC time helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================
