# storefront/storage.py
"""Persistence port and its in-memory implementation.

Every implementation returns pydantic records from `schemas`, signals
"not found" with None/False and raises `StorageError` for transport
failures and unique-key collisions.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, TypeVar

from pydantic import BaseModel

from .errors import StorageError
from .schemas import (
    Category, CategoryCreate, CategoryUpdate,
    ContactInfo, ContactInfoCreate, ContactInfoUpdate,
    Order, OrderCreate, OrderStatus,
    PaymentMethod, PaymentMethodCreate, PaymentMethodUpdate,
    Service, ServiceCreate, ServiceUpdate,
    Testimonial, TestimonialCreate, TestimonialUpdate,
    User, UserCreate,
)
from .security import get_password_hash

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class Storage(ABC):
    async def init(self) -> None:
        pass

    async def close(self) -> None:
        pass

    # 👤 Users
    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    # 🗂️ Categories
    @abstractmethod
    async def list_categories(self) -> list[Category]: ...

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[Category]: ...

    @abstractmethod
    async def get_category_by_slug(self, slug: str) -> Optional[Category]: ...

    @abstractmethod
    async def create_category(self, data: CategoryCreate) -> Category: ...

    @abstractmethod
    async def update_category(self, category_id: int, patch: CategoryUpdate) -> Optional[Category]: ...

    @abstractmethod
    async def delete_category(self, category_id: int) -> bool: ...

    # 🛍️ Services
    @abstractmethod
    async def list_services(self) -> list[Service]: ...

    @abstractmethod
    async def list_services_by_category(self, category_id: int) -> list[Service]: ...

    @abstractmethod
    async def list_featured_services(self) -> list[Service]: ...

    @abstractmethod
    async def get_service(self, service_id: int) -> Optional[Service]: ...

    @abstractmethod
    async def create_service(self, data: ServiceCreate) -> Service: ...

    @abstractmethod
    async def update_service(self, service_id: int, patch: ServiceUpdate) -> Optional[Service]: ...

    @abstractmethod
    async def delete_service(self, service_id: int) -> bool: ...

    # 💳 Payment methods
    @abstractmethod
    async def list_payment_methods(self) -> list[PaymentMethod]: ...

    @abstractmethod
    async def get_payment_method(self, method_id: int) -> Optional[PaymentMethod]: ...

    @abstractmethod
    async def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod: ...

    @abstractmethod
    async def update_payment_method(self, method_id: int, patch: PaymentMethodUpdate) -> Optional[PaymentMethod]: ...

    @abstractmethod
    async def delete_payment_method(self, method_id: int) -> bool: ...

    # ⭐ Testimonials
    @abstractmethod
    async def list_testimonials(self) -> list[Testimonial]: ...

    @abstractmethod
    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]: ...

    @abstractmethod
    async def create_testimonial(self, data: TestimonialCreate) -> Testimonial: ...

    @abstractmethod
    async def update_testimonial(self, testimonial_id: int, patch: TestimonialUpdate) -> Optional[Testimonial]: ...

    @abstractmethod
    async def delete_testimonial(self, testimonial_id: int) -> bool: ...

    # ☎️ Contact info
    @abstractmethod
    async def get_contact_info(self) -> Optional[ContactInfo]: ...

    @abstractmethod
    async def create_contact_info(self, data: ContactInfoCreate) -> ContactInfo: ...

    @abstractmethod
    async def update_contact_info(self, info_id: int, patch: ContactInfoUpdate) -> Optional[ContactInfo]: ...

    # 🧾 Orders
    @abstractmethod
    async def list_orders(self, status: Optional[OrderStatus] = None) -> list[Order]: ...

    @abstractmethod
    async def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    async def create_order(self, data: OrderCreate) -> Order: ...

    @abstractmethod
    async def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]: ...


def user_values(data: UserCreate) -> dict:
    return {
        "username": data.username,
        "password_hash": get_password_hash(data.password),
        "is_admin": data.is_admin,
    }


def order_values(data: OrderCreate) -> dict:
    values = data.model_dump(mode="json")
    values["created_at"] = datetime.now(timezone.utc)
    return values


class _Table:
    def __init__(self, record_cls: type[BaseModel]):
        self.record_cls = record_cls
        self.rows: dict[int, BaseModel] = {}
        self.next_id = 1


class MemoryStorage(Storage):
    """Dict-backed storage. One instance per app (or per test), never shared."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._tables = {
            User: _Table(User),
            Category: _Table(Category),
            Service: _Table(Service),
            PaymentMethod: _Table(PaymentMethod),
            Testimonial: _Table(Testimonial),
            ContactInfo: _Table(ContactInfo),
            Order: _Table(Order),
        }

    # generic helpers
    def _all(self, record_cls: type[R]) -> list[R]:
        return [r.model_copy(deep=True) for r in self._tables[record_cls].rows.values()]

    def _get(self, record_cls: type[R], record_id: int) -> Optional[R]:
        row = self._tables[record_cls].rows.get(record_id)
        return row.model_copy(deep=True) if row is not None else None

    def _check_unique(self, record_cls, field: str, value, exclude_id: Optional[int] = None) -> None:
        for row in self._tables[record_cls].rows.values():
            if row.id != exclude_id and getattr(row, field) == value:
                raise StorageError(f"{record_cls.__name__} with {field}={value!r} already exists")

    async def _insert(self, record_cls: type[R], values: dict, unique: tuple = ()) -> R:
        async with self._lock:
            for field in unique:
                self._check_unique(record_cls, field, values[field])
            table = self._tables[record_cls]
            record = record_cls.model_validate({**values, "id": table.next_id})
            table.rows[record.id] = record
            table.next_id += 1
            return record.model_copy(deep=True)

    async def _update(self, record_cls: type[R], record_id: int, changes: dict, unique: tuple = ()) -> Optional[R]:
        async with self._lock:
            table = self._tables[record_cls]
            current = table.rows.get(record_id)
            if current is None:
                return None
            for field in unique:
                if field in changes:
                    self._check_unique(record_cls, field, changes[field], exclude_id=record_id)
            record = record_cls.model_validate({**current.model_dump(), **changes})
            table.rows[record_id] = record
            return record.model_copy(deep=True)

    async def _delete(self, record_cls, record_id: int) -> bool:
        async with self._lock:
            return self._tables[record_cls].rows.pop(record_id, None) is not None

    # 👤 Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._all(User) if u.username == username), None)

    async def create_user(self, data: UserCreate) -> User:
        return await self._insert(User, user_values(data), unique=("username",))

    # 🗂️ Categories
    async def list_categories(self) -> list[Category]:
        return self._all(Category)

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self._get(Category, category_id)

    async def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return next((c for c in self._all(Category) if c.slug == slug), None)

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self._insert(Category, data.model_dump(mode="json"), unique=("slug",))

    async def update_category(self, category_id: int, patch: CategoryUpdate) -> Optional[Category]:
        return await self._update(Category, category_id, patch.changes(), unique=("slug",))

    async def delete_category(self, category_id: int) -> bool:
        return await self._delete(Category, category_id)

    # 🛍️ Services
    async def list_services(self) -> list[Service]:
        return self._all(Service)

    async def list_services_by_category(self, category_id: int) -> list[Service]:
        return [s for s in self._all(Service) if s.category_id == category_id]

    async def list_featured_services(self) -> list[Service]:
        return [s for s in self._all(Service) if s.featured]

    async def get_service(self, service_id: int) -> Optional[Service]:
        return self._get(Service, service_id)

    async def create_service(self, data: ServiceCreate) -> Service:
        return await self._insert(Service, data.model_dump(mode="json"))

    async def update_service(self, service_id: int, patch: ServiceUpdate) -> Optional[Service]:
        return await self._update(Service, service_id, patch.changes())

    async def delete_service(self, service_id: int) -> bool:
        return await self._delete(Service, service_id)

    # 💳 Payment methods
    async def list_payment_methods(self) -> list[PaymentMethod]:
        return self._all(PaymentMethod)

    async def get_payment_method(self, method_id: int) -> Optional[PaymentMethod]:
        return self._get(PaymentMethod, method_id)

    async def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod:
        return await self._insert(PaymentMethod, data.model_dump(mode="json"))

    async def update_payment_method(self, method_id: int, patch: PaymentMethodUpdate) -> Optional[PaymentMethod]:
        return await self._update(PaymentMethod, method_id, patch.changes())

    async def delete_payment_method(self, method_id: int) -> bool:
        return await self._delete(PaymentMethod, method_id)

    # ⭐ Testimonials
    async def list_testimonials(self) -> list[Testimonial]:
        return self._all(Testimonial)

    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]:
        return self._get(Testimonial, testimonial_id)

    async def create_testimonial(self, data: TestimonialCreate) -> Testimonial:
        return await self._insert(Testimonial, data.model_dump(mode="json"))

    async def update_testimonial(self, testimonial_id: int, patch: TestimonialUpdate) -> Optional[Testimonial]:
        return await self._update(Testimonial, testimonial_id, patch.changes())

    async def delete_testimonial(self, testimonial_id: int) -> bool:
        return await self._delete(Testimonial, testimonial_id)

    # ☎️ Contact info
    async def get_contact_info(self) -> Optional[ContactInfo]:
        rows = self._all(ContactInfo)
        return rows[0] if rows else None

    async def create_contact_info(self, data: ContactInfoCreate) -> ContactInfo:
        return await self._insert(ContactInfo, data.model_dump(mode="json"))

    async def update_contact_info(self, info_id: int, patch: ContactInfoUpdate) -> Optional[ContactInfo]:
        return await self._update(ContactInfo, info_id, patch.changes())

    # 🧾 Orders
    async def list_orders(self, status: Optional[OrderStatus] = None) -> list[Order]:
        orders = self._all(Order)
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return orders

    async def get_order(self, order_id: int) -> Optional[Order]:
        return self._get(Order, order_id)

    async def create_order(self, data: OrderCreate) -> Order:
        return await self._insert(Order, order_values(data))

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        return await self._update(Order, order_id, {"status": OrderStatus(status).value})
