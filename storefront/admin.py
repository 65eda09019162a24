# storefront/admin.py
import logging
from collections import Counter
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from .auth import require_admin
from .deps import get_storage, get_workflow
from .errors import NotFoundError
from .order_workflow import OrderWorkflow
from .schemas import (
    AdminStats, CategoryServiceCount,
    Category, CategoryCreate, CategoryUpdate,
    ContactInfo, ContactInfoUpdate,
    Order, OrderStatus, OrderStatusUpdate,
    PaymentMethod, PaymentMethodCreate, PaymentMethodUpdate,
    Service, ServiceCreate, ServiceUpdate,
    Testimonial, TestimonialCreate, TestimonialUpdate,
)
from .storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# 🗂️ Categories
@router.post("/categories", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, storage: Storage = Depends(get_storage)):
    category = await storage.create_category(payload)
    logger.info("Category #%s (%s) created", category.id, category.slug)
    return category


@router.put("/categories/{category_id}", response_model=Category)
async def update_category(category_id: int, payload: CategoryUpdate, storage: Storage = Depends(get_storage)):
    category = await storage.update_category(category_id, payload)
    if category is None:
        raise NotFoundError("Category not found")
    return category


# services keep their category_id after this
@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(category_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_category(category_id):
        raise NotFoundError("Category not found")
    logger.info("Category #%s deleted", category_id)
    return Response(status_code=204)


# 🛍️ Services
@router.post("/services", response_model=Service, status_code=status.HTTP_201_CREATED)
async def create_service(payload: ServiceCreate, storage: Storage = Depends(get_storage)):
    service = await storage.create_service(payload)
    logger.info("Service #%s created", service.id)
    return service


@router.put("/services/{service_id}", response_model=Service)
async def update_service(service_id: int, payload: ServiceUpdate, storage: Storage = Depends(get_storage)):
    service = await storage.update_service(service_id, payload)
    if service is None:
        raise NotFoundError("Service not found")
    return service


@router.delete("/services/{service_id}", status_code=204)
async def delete_service(service_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_service(service_id):
        raise NotFoundError("Service not found")
    logger.info("Service #%s deleted", service_id)
    return Response(status_code=204)


# 💳 Payment methods
@router.post("/payment-methods", response_model=PaymentMethod, status_code=status.HTTP_201_CREATED)
async def create_payment_method(payload: PaymentMethodCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_payment_method(payload)


@router.put("/payment-methods/{method_id}", response_model=PaymentMethod)
async def update_payment_method(method_id: int, payload: PaymentMethodUpdate, storage: Storage = Depends(get_storage)):
    method = await storage.update_payment_method(method_id, payload)
    if method is None:
        raise NotFoundError("Payment method not found")
    return method


@router.delete("/payment-methods/{method_id}", status_code=204)
async def delete_payment_method(method_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_payment_method(method_id):
        raise NotFoundError("Payment method not found")
    return Response(status_code=204)


# ⭐ Testimonials
@router.post("/testimonials", response_model=Testimonial, status_code=status.HTTP_201_CREATED)
async def create_testimonial(payload: TestimonialCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_testimonial(payload)


@router.put("/testimonials/{testimonial_id}", response_model=Testimonial)
async def update_testimonial(testimonial_id: int, payload: TestimonialUpdate, storage: Storage = Depends(get_storage)):
    testimonial = await storage.update_testimonial(testimonial_id, payload)
    if testimonial is None:
        raise NotFoundError("Testimonial not found")
    return testimonial


@router.delete("/testimonials/{testimonial_id}", status_code=204)
async def delete_testimonial(testimonial_id: int, storage: Storage = Depends(get_storage)):
    if not await storage.delete_testimonial(testimonial_id):
        raise NotFoundError("Testimonial not found")
    return Response(status_code=204)


# ☎️ Contact info
@router.put("/contact-info/{info_id}", response_model=ContactInfo)
async def update_contact_info(info_id: int, payload: ContactInfoUpdate, storage: Storage = Depends(get_storage)):
    info = await storage.update_contact_info(info_id, payload)
    if info is None:
        raise NotFoundError("Contact information not found")
    return info


# 🧾 Orders
@router.get("/orders", response_model=List[Order])
async def list_orders(status: Optional[OrderStatus] = None, storage: Storage = Depends(get_storage)):
    return await storage.list_orders(status)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: int, storage: Storage = Depends(get_storage)):
    order = await storage.get_order(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


@router.put("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    workflow: OrderWorkflow = Depends(get_workflow),
):
    return await workflow.set_order_status(order_id, payload.status)


# 📊 Dashboard numbers
@router.get("/stats", response_model=AdminStats)
async def dashboard_stats(storage: Storage = Depends(get_storage)):
    services = await storage.list_services()
    categories = await storage.list_categories()
    orders = await storage.list_orders()

    per_category = Counter(s.category_id for s in services)
    by_status = Counter(o.status.value for o in orders)
    return AdminStats(
        total_services=len(services),
        total_categories=len(categories),
        services_per_category=[
            CategoryServiceCount(category_id=c.id, count=per_category.get(c.id, 0)) for c in categories
        ],
        orders_by_status={s.value: by_status.get(s.value, 0) for s in OrderStatus},
        approved_revenue=sum(o.amount for o in orders if o.status == OrderStatus.approved),
    )
