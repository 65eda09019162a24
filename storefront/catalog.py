# storefront/catalog.py
from typing import Optional

from .schemas import Category, ContactInfo, PaymentMethod, Service, Testimonial
from .storage import Storage


class CatalogService:
    """Read-only view of the catalog. No caching: every call hits storage."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def categories(self) -> list[Category]:
        return await self.storage.list_categories()

    async def category_by_slug(self, slug: str) -> Optional[Category]:
        return await self.storage.get_category_by_slug(slug)

    async def services(self) -> list[Service]:
        return await self.storage.list_services()

    async def services_by_category(self, category_id: int) -> list[Service]:
        return await self.storage.list_services_by_category(category_id)

    async def featured_services(self) -> list[Service]:
        return await self.storage.list_featured_services()

    async def service_by_id(self, service_id: int) -> Optional[Service]:
        return await self.storage.get_service(service_id)

    async def payment_methods(self) -> list[PaymentMethod]:
        return await self.storage.list_payment_methods()

    async def testimonials(self) -> list[Testimonial]:
        return await self.storage.list_testimonials()

    async def contact_info(self) -> Optional[ContactInfo]:
        return await self.storage.get_contact_info()
