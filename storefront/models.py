from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Index, Integer, String, Text, func,
)

from .database import Base


# 🗂️ Category
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    icon = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)


# 🛍️ Service. category_id is a plain integer: deleting a category leaves services in place.
class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    image = Column(Text, nullable=True)
    category_id = Column(Integer, nullable=False)
    featured = Column(Boolean, nullable=False, default=False)
    payment_instructions = Column(Text, nullable=True)
    kind = Column(String(50), nullable=True)

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_services_price_pos"),
        Index("ix_services_category", "category_id"),
        Index("ix_services_featured", "featured"),
    )


class PaymentMethod(Base):
    __tablename__ = "payment_methods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    icon = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    image = Column(Text, nullable=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_testimonials_rating_range"),
    )


# single-row table
class ContactInfo(Base):
    __tablename__ = "contact_info"

    id = Column(Integer, primary_key=True, index=True)
    address = Column(Text, nullable=False)
    phone = Column(String(100), nullable=False)
    telegram_link = Column(Text, nullable=False)
    telegram_username = Column(String(255), nullable=False)
    facebook_link = Column(Text, nullable=False, default="")
    instagram_link = Column(Text, nullable=False, default="")
    twitter_link = Column(Text, nullable=False, default="")
    show_social_icons = Column(Boolean, nullable=False, default=False)
    weekday_hours = Column(String(255), nullable=False)
    weekend_hours = Column(String(255), nullable=False)
    time_zone = Column(String(255), nullable=False)


# 👤 Admin user
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, nullable=False)
    service_name = Column(String(255), nullable=False)        # snapshot at purchase time
    payment_method_id = Column(Integer, nullable=False)
    payment_method = Column(String(255), nullable=False)      # snapshot at purchase time
    amount = Column(Integer, nullable=False)                  # price snapshot at purchase time
    status = Column(String(20), nullable=False, default="pending")
    screenshot_url = Column(Text, nullable=False)             # URL or data:image/...;base64
    customer_phone = Column(String(100), nullable=False)
    customer_telegram = Column(String(255), nullable=True)
    platform_username = Column(String(255), nullable=True)
    target_url = Column(Text, nullable=True)
    target_purpose = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_orders_status"),
        CheckConstraint("amount > 0", name="ck_orders_amount_pos"),
        Index("ix_orders_status_created", "status", "created_at"),
    )
