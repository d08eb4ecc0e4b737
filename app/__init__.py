# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers, server entry point
# - config.py: Environment variable loading and settings
# - context.py: Settings + database handle injected into handlers
# - body.py: JSON / URL-encoded request body parsing
# - middleware.py: Request logging
# - auth/: Registration, login and token verification
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
