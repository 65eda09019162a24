# storefront/sql_storage.py
import logging
from datetime import datetime, timezone
from typing import Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from . import models
from .database import create_tables, make_engine, make_session_maker
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
from .storage import Storage, order_values, user_values

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def to_record(row, record_cls: type[R]) -> R:
    values = {}
    for column in row.__table__.columns:
        value = getattr(row, column.key)
        # sqlite hands back naive datetimes; they were written as UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        values[column.key] = value
    return record_cls.model_validate(values)


class SqlStorage(Storage):
    """SQLAlchemy-backed storage. One transaction per call."""

    def __init__(self, engine: AsyncEngine, session_maker: Optional[async_sessionmaker[AsyncSession]] = None):
        self.engine = engine
        self.session_maker = session_maker or make_session_maker(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SqlStorage":
        return cls(make_engine(database_url, echo=echo))

    async def init(self) -> None:
        try:
            await create_tables(self.engine)
        except SQLAlchemyError as e:
            logger.error("Could not create tables: %s", e)
            raise StorageError("Database unavailable") from e

    async def close(self) -> None:
        await self.engine.dispose()

    # generic helpers
    async def _select(self, model, record_cls: type[R], *where) -> list[R]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(model).where(*where).order_by(model.id))
                return [to_record(row, record_cls) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Query on %s failed: %s", model.__tablename__, e)
            raise StorageError("Database query failed") from e

    async def _first(self, model, record_cls: type[R], *where) -> Optional[R]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(select(model).where(*where).order_by(model.id).limit(1))
                row = result.scalar_one_or_none()
                return to_record(row, record_cls) if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Query on %s failed: %s", model.__tablename__, e)
            raise StorageError("Database query failed") from e

    async def _insert(self, model, record_cls: type[R], values: dict) -> R:
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    row = model(**values)
                    session.add(row)
                    await session.flush()  # assigns row.id
                return to_record(row, record_cls)
        except IntegrityError as e:
            logger.warning("Insert into %s rejected: %s", model.__tablename__, e.orig)
            raise StorageError(f"{record_cls.__name__} violates a database constraint") from e
        except SQLAlchemyError as e:
            logger.error("Insert into %s failed: %s", model.__tablename__, e)
            raise StorageError("Database write failed") from e

    async def _update(self, model, record_cls: type[R], record_id: int, changes: dict) -> Optional[R]:
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    # row lock serializes concurrent updates of the same record
                    result = await session.execute(
                        select(model).where(model.id == record_id).with_for_update()
                    )
                    row = result.scalar_one_or_none()
                    if row is None:
                        return None
                    for key, value in changes.items():
                        setattr(row, key, value)
                return to_record(row, record_cls)
        except IntegrityError as e:
            logger.warning("Update of %s #%s rejected: %s", model.__tablename__, record_id, e.orig)
            raise StorageError(f"{record_cls.__name__} violates a database constraint") from e
        except SQLAlchemyError as e:
            logger.error("Update of %s #%s failed: %s", model.__tablename__, record_id, e)
            raise StorageError("Database write failed") from e

    async def _delete(self, model, record_id: int) -> bool:
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    result = await session.execute(delete(model).where(model.id == record_id))
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Delete from %s #%s failed: %s", model.__tablename__, record_id, e)
            raise StorageError("Database write failed") from e

    # 👤 Users
    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._first(models.User, User, models.User.id == user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._first(models.User, User, models.User.username == username)

    async def create_user(self, data: UserCreate) -> User:
        return await self._insert(models.User, User, user_values(data))

    # 🗂️ Categories
    async def list_categories(self) -> list[Category]:
        return await self._select(models.Category, Category)

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self._first(models.Category, Category, models.Category.id == category_id)

    async def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return await self._first(models.Category, Category, models.Category.slug == slug)

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self._insert(models.Category, Category, data.model_dump(mode="json"))

    async def update_category(self, category_id: int, patch: CategoryUpdate) -> Optional[Category]:
        return await self._update(models.Category, Category, category_id, patch.changes())

    async def delete_category(self, category_id: int) -> bool:
        return await self._delete(models.Category, category_id)

    # 🛍️ Services
    async def list_services(self) -> list[Service]:
        return await self._select(models.Service, Service)

    async def list_services_by_category(self, category_id: int) -> list[Service]:
        return await self._select(models.Service, Service, models.Service.category_id == category_id)

    async def list_featured_services(self) -> list[Service]:
        return await self._select(models.Service, Service, models.Service.featured.is_(True))

    async def get_service(self, service_id: int) -> Optional[Service]:
        return await self._first(models.Service, Service, models.Service.id == service_id)

    async def create_service(self, data: ServiceCreate) -> Service:
        return await self._insert(models.Service, Service, data.model_dump(mode="json"))

    async def update_service(self, service_id: int, patch: ServiceUpdate) -> Optional[Service]:
        return await self._update(models.Service, Service, service_id, patch.changes())

    async def delete_service(self, service_id: int) -> bool:
        return await self._delete(models.Service, service_id)

    # 💳 Payment methods
    async def list_payment_methods(self) -> list[PaymentMethod]:
        return await self._select(models.PaymentMethod, PaymentMethod)

    async def get_payment_method(self, method_id: int) -> Optional[PaymentMethod]:
        return await self._first(models.PaymentMethod, PaymentMethod, models.PaymentMethod.id == method_id)

    async def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod:
        return await self._insert(models.PaymentMethod, PaymentMethod, data.model_dump(mode="json"))

    async def update_payment_method(self, method_id: int, patch: PaymentMethodUpdate) -> Optional[PaymentMethod]:
        return await self._update(models.PaymentMethod, PaymentMethod, method_id, patch.changes())

    async def delete_payment_method(self, method_id: int) -> bool:
        return await self._delete(models.PaymentMethod, method_id)

    # ⭐ Testimonials
    async def list_testimonials(self) -> list[Testimonial]:
        return await self._select(models.Testimonial, Testimonial)

    async def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]:
        return await self._first(models.Testimonial, Testimonial, models.Testimonial.id == testimonial_id)

    async def create_testimonial(self, data: TestimonialCreate) -> Testimonial:
        return await self._insert(models.Testimonial, Testimonial, data.model_dump(mode="json"))

    async def update_testimonial(self, testimonial_id: int, patch: TestimonialUpdate) -> Optional[Testimonial]:
        return await self._update(models.Testimonial, Testimonial, testimonial_id, patch.changes())

    async def delete_testimonial(self, testimonial_id: int) -> bool:
        return await self._delete(models.Testimonial, testimonial_id)

    # ☎️ Contact info
    async def get_contact_info(self) -> Optional[ContactInfo]:
        return await self._first(models.ContactInfo, ContactInfo)

    async def create_contact_info(self, data: ContactInfoCreate) -> ContactInfo:
        return await self._insert(models.ContactInfo, ContactInfo, data.model_dump(mode="json"))

    async def update_contact_info(self, info_id: int, patch: ContactInfoUpdate) -> Optional[ContactInfo]:
        return await self._update(models.ContactInfo, ContactInfo, info_id, patch.changes())

    # 🧾 Orders
    async def list_orders(self, status: Optional[OrderStatus] = None) -> list[Order]:
        where = [] if status is None else [models.Order.status == OrderStatus(status).value]
        return await self._select(models.Order, Order, *where)

    async def get_order(self, order_id: int) -> Optional[Order]:
        return await self._first(models.Order, Order, models.Order.id == order_id)

    async def create_order(self, data: OrderCreate) -> Order:
        return await self._insert(models.Order, Order, order_values(data))

    async def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        return await self._update(models.Order, Order, order_id, {"status": OrderStatus(status).value})
