"""Storefront FastAPI application.

Initializes the storefront domain at module level and exposes the API.
The shopper session is opened on the first request with the default menu.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.api.app import create_app
from storefront.domain import storefront
from storefront.utils.logging import configure_logging

configure_logging()
storefront.init()

app = create_app()
