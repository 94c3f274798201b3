from fastapi import Request

from .cache import ViewCache
from .stores import InvoiceStore


def get_store(request: Request) -> InvoiceStore:
    """Store chosen when the app was built"""
    return request.app.state.store


def get_view_cache(request: Request) -> ViewCache:
    return request.app.state.view_cache
