# storefront/orders.py
from fastapi import APIRouter, Depends, status

from .deps import get_workflow
from .order_workflow import OrderWorkflow
from .schemas import Order, OrderSubmit

router = APIRouter(prefix="/api/orders", tags=["orders"])


# ✅ Checkout: manual payment, screenshot as proof
@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(payload: OrderSubmit, workflow: OrderWorkflow = Depends(get_workflow)):
    # client-sent serviceName/amount/status are ignored; the workflow snapshots them
    return await workflow.submit_order(
        service_id=payload.service_id,
        payment_method_id=payload.payment_method_id,
        screenshot=payload.screenshot_url,
        phone=payload.customer_phone,
        telegram=payload.customer_telegram,
        platform_username=payload.platform_username,
        target_url=payload.target_url,
    )
