"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the configuration overlay from domain.toml
(``production`` switches the database to PostgreSQL).
"""

from storefront.api.app import create_app
from storefront.domain import storefront

storefront.init()

app = create_app()
