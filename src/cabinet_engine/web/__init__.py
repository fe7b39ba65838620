"""FastAPI REST API for the cabinet engine.

This module provides a REST API for deriving cabinet parts, evaluating
formulas, validating catalogs and optimising cutting layouts.

Usage:
    uvicorn cabinet_engine.web:app --reload
"""

from cabinet_engine.web.app import app, create_app

__all__ = ["app", "create_app"]
