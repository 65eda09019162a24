# storefront/order_workflow.py
"""Checkout and admin status changes for orders.

The workflow validates everything it owns (required fields, screenshot form,
status values) itself, so it is safe to call without going through HTTP.
"""
import logging
import re
from typing import Optional
from urllib.parse import urlparse

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .checkout_rules import (
    PAYMENT_METHOD, PHONE, PLATFORM_USERNAME, SCREENSHOT, TARGET_URL,
    CategoryIds, missing_fields, required_fields,
)
from .config import Settings
from .errors import NotFoundError, ValidationError
from .schemas import CheckoutRequirements, Order, OrderCreate, OrderStatus, TargetPurpose
from .storage import Storage

logger = logging.getLogger(__name__)

# media type, optional ;param=value pairs, then standard or URL-safe base64
DATA_URL_RE = re.compile(
    r"^data:image/[A-Za-z0-9.+-]+(?:;[A-Za-z0-9!#$&.+^_-]+=[^;,]*)*;base64,[A-Za-z0-9+/_=\s-]+$"
)

_email = TypeAdapter(EmailStr)

# used only when strict transitions are switched on
ALLOWED_TRANSITIONS = {
    OrderStatus.pending: {OrderStatus.approved, OrderStatus.rejected},
    OrderStatus.approved: set(),
    OrderStatus.rejected: set(),
}


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def is_valid_screenshot(value: str) -> bool:
    if value.startswith("data:"):
        return DATA_URL_RE.match(value) is not None
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(
            "Invalid status value",
            errors=[{"field": "status", "message": "Status must be one of: pending, approved, rejected"}],
        )


def _order_errors(exc: PydanticValidationError) -> list[dict]:
    # loc holds the field name or its wire alias depending on how the model was built
    out = []
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else ""
        field = OrderCreate.model_fields.get(name)
        out.append({"field": (field.alias if field and field.alias else name) or None, "message": err["msg"]})
    return out


class OrderWorkflow:
    def __init__(self, storage: Storage, settings: Optional[Settings] = None):
        self.storage = storage
        self.settings = settings or Settings()
        self.categories = CategoryIds.from_settings(self.settings)

    async def checkout_requirements(self, service_id: int) -> CheckoutRequirements:
        service = await self.storage.get_service(service_id)
        if service is None:
            raise NotFoundError("Service not found")
        return required_fields(service, self.categories).as_schema(service.id)

    async def submit_order(
        self,
        service_id: int,
        payment_method_id: int,
        screenshot: Optional[str],
        phone: Optional[str],
        telegram: Optional[str] = None,
        platform_username: Optional[str] = None,
        target_url: Optional[str] = None,
    ) -> Order:
        service = await self.storage.get_service(service_id)
        if service is None:
            raise NotFoundError("Service not found")
        payment_method = await self.storage.get_payment_method(payment_method_id)
        if payment_method is None:
            raise NotFoundError("Payment method not found")

        req = required_fields(service, self.categories)
        missing = missing_fields(req, {
            PHONE: phone,
            PLATFORM_USERNAME: platform_username,
            TARGET_URL: target_url,
            SCREENSHOT: screenshot,
            PAYMENT_METHOD: str(payment_method_id),
        })
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                errors=[{"field": name, "message": "This field is required"} for name in missing],
            )

        # stored verbatim, only the form is checked
        if not is_valid_screenshot(screenshot):
            raise ValidationError(
                "Invalid payment screenshot",
                errors=[{"field": SCREENSHOT, "message": "Expected an http(s) URL or a base64 image data URL"}],
            )

        target_url = _clean(target_url)
        purpose = req.target_purpose if target_url is not None else None
        if purpose is TargetPurpose.delivery_email:
            try:
                _email.validate_python(target_url)
            except PydanticValidationError:
                raise ValidationError(
                    "Invalid delivery email",
                    errors=[{"field": TARGET_URL, "message": "A valid email address is required"}],
                )

        # price and names are snapshotted; later catalog edits do not touch the order
        try:
            data = OrderCreate(
                service_id=service.id,
                service_name=service.name,
                payment_method_id=payment_method.id,
                payment_method=payment_method.name,
                amount=service.price,
                status=OrderStatus.pending,
                screenshot_url=screenshot,
                customer_phone=_clean(phone),
                customer_telegram=_clean(telegram),
                platform_username=_clean(platform_username),
                target_url=target_url,
                target_purpose=purpose,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid order data", errors=_order_errors(e))
        order = await self.storage.create_order(data)
        logger.info(
            "Order #%s created: service=%s amount=%s payment_method=%s",
            order.id, service.id, order.amount, payment_method.name,
        )
        return order

    async def set_order_status(self, order_id: int, new_status) -> Order:
        target = parse_status(new_status)
        order = await self.storage.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        if order.status == target:
            return order

        if self.settings.strict_order_transitions and target not in ALLOWED_TRANSITIONS[order.status]:
            raise ValidationError(
                f"Cannot change order status from {order.status.value} to {target.value}",
                errors=[{"field": "status", "message": "Transition not allowed"}],
            )

        updated = await self.storage.update_order_status(order_id, target)
        if updated is None:
            raise NotFoundError("Order not found")
        logger.info("Order #%s status %s -> %s", order_id, order.status.value, target.value)
        return updated
