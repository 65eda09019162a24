# storefront/deps.py
from fastapi import Request

from .catalog import CatalogService
from .config import Settings
from .order_workflow import OrderWorkflow
from .storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> CatalogService:
    return CatalogService(request.app.state.storage)


def get_workflow(request: Request) -> OrderWorkflow:
    return OrderWorkflow(request.app.state.storage, request.app.state.settings)
