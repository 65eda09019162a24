# storefront/schemas.py
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire; both accepted on input
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialModel(CamelModel):
    """Partial update: only fields the client sent are applied.

    Sending null is allowed only for columns listed in `nullable`.
    """

    nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class OrderStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ServiceKind(str, Enum):
    followers = "followers"
    subscribers = "subscribers"
    likes = "likes"
    views = "views"
    comments = "comments"
    members = "members"
    giftcard = "giftcard"
    other = "other"


class TargetPurpose(str, Enum):
    content_url = "contentUrl"
    channel_url = "channelUrl"
    delivery_email = "deliveryEmail"


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

# VARCHAR sizes in models.py; longer values are a 400 here, not a database error
NAME_LEN = 255
SHORT_LEN = 100


# 🗂️ Category
class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=NAME_LEN)
    slug: str = Field(max_length=NAME_LEN, pattern=SLUG_PATTERN)
    icon: str = Field(min_length=1, max_length=SHORT_LEN)
    description: Optional[str] = None


class CategoryUpdate(PartialModel):
    nullable: ClassVar[frozenset[str]] = frozenset({"description"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_LEN)
    slug: Optional[str] = Field(default=None, max_length=NAME_LEN, pattern=SLUG_PATTERN)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=SHORT_LEN)
    description: Optional[str] = None


class Category(CategoryCreate):
    id: int


# 🛍️ Service
class ServiceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=NAME_LEN)
    description: str
    price: int = Field(gt=0)
    image: Optional[str] = None
    category_id: int
    featured: bool = False
    payment_instructions: Optional[str] = None
    # explicit tag; when absent the checkout rules derive kinds from the name
    kind: Optional[ServiceKind] = None


class ServiceUpdate(PartialModel):
    nullable: ClassVar[frozenset[str]] = frozenset({"image", "payment_instructions", "kind"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_LEN)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, gt=0)
    image: Optional[str] = None
    category_id: Optional[int] = None
    featured: Optional[bool] = None
    payment_instructions: Optional[str] = None
    kind: Optional[ServiceKind] = None


class Service(ServiceCreate):
    id: int


# 💳 Payment method
class PaymentMethodCreate(CamelModel):
    name: str = Field(min_length=1, max_length=NAME_LEN)
    icon: str = Field(min_length=1, max_length=SHORT_LEN)
    description: Optional[str] = None
    instructions: Optional[str] = None


class PaymentMethodUpdate(PartialModel):
    nullable: ClassVar[frozenset[str]] = frozenset({"description", "instructions"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_LEN)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=SHORT_LEN)
    description: Optional[str] = None
    instructions: Optional[str] = None


class PaymentMethod(PaymentMethodCreate):
    id: int


# ⭐ Testimonial
class TestimonialCreate(CamelModel):
    name: str = Field(min_length=1, max_length=NAME_LEN)
    image: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    comment: str


class TestimonialUpdate(PartialModel):
    nullable: ClassVar[frozenset[str]] = frozenset({"image"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_LEN)
    image: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None


class Testimonial(TestimonialCreate):
    id: int


# ☎️ Contact info
class ContactInfoCreate(CamelModel):
    address: str
    phone: str = Field(max_length=SHORT_LEN)
    telegram_link: str
    telegram_username: str = Field(max_length=NAME_LEN)
    facebook_link: str = ""
    instagram_link: str = ""
    twitter_link: str = ""
    show_social_icons: bool = False
    weekday_hours: str = Field(default="Monday - Saturday: 9:00 AM - 8:00 PM", max_length=NAME_LEN)
    weekend_hours: str = Field(default="Sunday: 10:00 AM - 6:00 PM", max_length=NAME_LEN)
    time_zone: str = Field(default="East Africa Time (EAT)", max_length=NAME_LEN)


class ContactInfoUpdate(PartialModel):
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=SHORT_LEN)
    telegram_link: Optional[str] = None
    telegram_username: Optional[str] = Field(default=None, max_length=NAME_LEN)
    facebook_link: Optional[str] = None
    instagram_link: Optional[str] = None
    twitter_link: Optional[str] = None
    show_social_icons: Optional[bool] = None
    weekday_hours: Optional[str] = Field(default=None, max_length=NAME_LEN)
    weekend_hours: Optional[str] = Field(default=None, max_length=NAME_LEN)
    time_zone: Optional[str] = Field(default=None, max_length=NAME_LEN)


class ContactInfo(ContactInfoCreate):
    id: int


# 👤 Admin user
class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=NAME_LEN)
    password: str = Field(min_length=1)
    is_admin: bool = False


class User(CamelModel):
    id: int
    username: str
    password_hash: str
    is_admin: bool = False


class AdminLogin(CamelModel):
    username: str
    password: str


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"


# 🧾 Order
class OrderCreate(CamelModel):
    """Insert shape handed to storage; built by the order workflow, not by clients."""

    service_id: int
    service_name: str = Field(max_length=NAME_LEN)
    payment_method_id: int
    payment_method: str = Field(max_length=NAME_LEN)
    amount: int = Field(gt=0)
    status: OrderStatus = OrderStatus.pending
    screenshot_url: str
    customer_phone: str = Field(max_length=SHORT_LEN)
    customer_telegram: Optional[str] = Field(default=None, max_length=NAME_LEN)
    platform_username: Optional[str] = Field(default=None, max_length=NAME_LEN)
    target_url: Optional[str] = None
    target_purpose: Optional[TargetPurpose] = None


class Order(OrderCreate):
    id: int
    created_at: datetime


class OrderSubmit(CamelModel):
    """Checkout body.

    serviceName, paymentMethod, amount and status are accepted for compatibility
    with older clients and ignored: the order snapshots them from the catalog.
    Required contact fields are optional here so that the checkout rules can
    report every missing one in a single 400.
    """

    service_id: int
    payment_method_id: int
    screenshot_url: Optional[str] = None
    customer_phone: Optional[str] = Field(default=None, max_length=SHORT_LEN)
    customer_telegram: Optional[str] = Field(default=None, max_length=NAME_LEN)
    platform_username: Optional[str] = Field(default=None, max_length=NAME_LEN)
    target_url: Optional[str] = None
    service_name: Optional[str] = None
    payment_method: Optional[str] = None
    amount: Optional[int] = None
    status: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class CheckoutRequirements(CamelModel):
    service_id: int
    kinds: list[ServiceKind]
    required_fields: list[str]
    target_purpose: Optional[TargetPurpose] = None


# 📊 Admin dashboard
class CategoryServiceCount(CamelModel):
    category_id: int
    count: int


class AdminStats(CamelModel):
    total_services: int
    total_categories: int
    services_per_category: list[CategoryServiceCount]
    orders_by_status: dict[str, int]
    approved_revenue: int
