# storefront/shop.py
from typing import List

from fastapi import APIRouter, Depends

from .catalog import CatalogService
from .deps import get_catalog, get_workflow
from .errors import NotFoundError
from .order_workflow import OrderWorkflow
from .schemas import Category, CheckoutRequirements, PaymentMethod, Service, Testimonial

router = APIRouter(prefix="/api", tags=["catalog"])


# 🗂️ Categories
@router.get("/categories", response_model=List[Category])
async def list_categories(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.categories()


@router.get("/categories/{slug}", response_model=Category)
async def get_category(slug: str, catalog: CatalogService = Depends(get_catalog)):
    category = await catalog.category_by_slug(slug)
    if category is None:
        raise NotFoundError("Category not found")
    return category


# 🛍️ Services. /featured and /category/... are declared before /{service_id}
@router.get("/services", response_model=List[Service])
async def list_services(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.services()


@router.get("/services/featured", response_model=List[Service])
async def list_featured_services(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.featured_services()


@router.get("/services/category/{category_id}", response_model=List[Service])
async def list_services_by_category(category_id: int, catalog: CatalogService = Depends(get_catalog)):
    return await catalog.services_by_category(category_id)


@router.get("/services/{service_id}", response_model=Service)
async def get_service(service_id: int, catalog: CatalogService = Depends(get_catalog)):
    service = await catalog.service_by_id(service_id)
    if service is None:
        raise NotFoundError("Service not found")
    return service


@router.get("/services/{service_id}/checkout-fields", response_model=CheckoutRequirements)
async def get_checkout_fields(service_id: int, workflow: OrderWorkflow = Depends(get_workflow)):
    return await workflow.checkout_requirements(service_id)


@router.get("/payment-methods", response_model=List[PaymentMethod])
async def list_payment_methods(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.payment_methods()


@router.get("/testimonials", response_model=List[Testimonial])
async def list_testimonials(catalog: CatalogService = Depends(get_catalog)):
    return await catalog.testimonials()


# an empty object, not a 404, when the row has not been created yet
@router.get("/contact-info")
async def get_contact_info(catalog: CatalogService = Depends(get_catalog)):
    info = await catalog.contact_info()
    if info is None:
        return {}
    return info.model_dump(mode="json", by_alias=True)
