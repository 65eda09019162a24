# storefront/seed.py
"""Demo catalog: admin account, contact row, categories, services, payment methods, testimonials.

Idempotent: does nothing once any category exists.
"""
import logging

from .config import Settings
from .schemas import (
    CategoryCreate, ContactInfoCreate, PaymentMethodCreate,
    ServiceCreate, TestimonialCreate, UserCreate,
)
from .storage import Storage

logger = logging.getLogger(__name__)

# id order matters: the checkout rules key on YouTube=2, Twitter/X=5, Gift Cards=7
CATEGORIES = [
    {"name": "TikTok", "slug": "tiktok", "icon": "hashtag", "description": "TikTok followers, likes, views and more"},
    {"name": "YouTube", "slug": "youtube", "icon": "play", "description": "YouTube subscribers, views, and engagement services"},
    {"name": "Instagram", "slug": "instagram", "icon": "hashtag", "description": "Instagram followers, likes and engagement services"},
    {"name": "Facebook", "slug": "facebook", "icon": "users", "description": "Facebook page likes, followers and engagement"},
    {"name": "Twitter/X", "slug": "twitter", "icon": "hashtag", "description": "Twitter followers, retweets, and engagement"},
    {"name": "Subscription Services", "slug": "subscription", "icon": "calendar-check", "description": "Premium subscriptions for streaming platforms"},
    {"name": "Gift Cards", "slug": "giftcards", "icon": "gift", "description": "Digital gift cards for various platforms"},
]

# (category slug, name, description, price, featured)
SERVICES = [
    ("tiktok", "TikTok Followers (1000)", "1000 real-looking followers delivered within 24 hours", 450, True),
    ("tiktok", "TikTok Likes (1000)", "1000 likes on a single video", 250, False),
    ("tiktok", "TikTok Views (10000)", "10000 views on a single video", 200, False),
    ("youtube", "YouTube Subscribers (500)", "500 subscribers for your channel", 1200, True),
    ("youtube", "YouTube Views (5000)", "5000 views on a single video", 600, False),
    ("instagram", "Instagram Followers (1000)", "1000 followers for your profile", 500, True),
    ("instagram", "Instagram Likes (500)", "500 likes on a single post", 150, False),
    ("facebook", "Facebook Page Likes (1000)", "1000 likes for your page", 550, False),
    ("twitter", "Twitter/X Followers (500)", "500 followers for your account", 400, False),
    ("twitter", "Twitter/X Retweets (100)", "100 retweets on a single post", 300, False),
    ("subscription", "Netflix Premium (1 Month)", "One month of Netflix Premium", 900, True),
    ("subscription", "Telegram Members (1000)", "1000 members for a channel or group", 700, False),
    ("giftcards", "Amazon Gift Card ($25)", "Digital Amazon gift card delivered by email", 3500, True),
    ("giftcards", "Google Play Gift Card ($10)", "Digital Google Play gift card delivered by email", 1500, False),
]

PAYMENT_METHODS = [
    {"name": "Telebirr", "icon": "mobile", "description": "Mobile money transfer",
     "instructions": "Send the exact amount to 0912345678 and upload a screenshot of the confirmation."},
    {"name": "CBE Birr", "icon": "university", "description": "Commercial Bank of Ethiopia mobile banking",
     "instructions": "Transfer to account 1000123456789 and upload the receipt screenshot."},
    {"name": "Bank Transfer", "icon": "credit-card", "description": "Direct bank deposit",
     "instructions": "Deposit at any branch and upload a photo of the deposit slip."},
]

TESTIMONIALS = [
    {"name": "Abebe K.", "rating": 5, "comment": "Fast delivery, my followers arrived the same day."},
    {"name": "Sara M.", "rating": 5, "comment": "Gift card came to my email within an hour."},
    {"name": "Yonas T.", "rating": 4, "comment": "Good service, support answered quickly on Telegram."},
]

CONTACT_INFO = {
    "address": "Bole, Addis Ababa, Ethiopia",
    "phone": "+251 91 234 5678",
    "telegram_link": "https://t.me/storefront_support",
    "telegram_username": "@storefront_support on Telegram",
}


async def seed_demo_data(storage: Storage, settings: Settings) -> bool:
    """Returns False when the store already had data."""
    if await storage.list_categories():
        logger.info("Catalog already present, skipping seed")
        return False

    if await storage.get_user_by_username(settings.admin_username) is None:
        await storage.create_user(UserCreate(
            username=settings.admin_username, password=settings.admin_password, is_admin=True,
        ))
    if await storage.get_contact_info() is None:
        await storage.create_contact_info(ContactInfoCreate(**CONTACT_INFO))

    category_ids = {}
    for data in CATEGORIES:
        category = await storage.create_category(CategoryCreate(**data))
        category_ids[category.slug] = category.id

    for slug, name, description, price, featured in SERVICES:
        await storage.create_service(ServiceCreate(
            name=name, description=description, price=price,
            category_id=category_ids[slug], featured=featured,
        ))
    for data in PAYMENT_METHODS:
        await storage.create_payment_method(PaymentMethodCreate(**data))
    for data in TESTIMONIALS:
        await storage.create_testimonial(TestimonialCreate(**data))

    logger.info(
        "Seeded %d categories, %d services, %d payment methods",
        len(CATEGORIES), len(SERVICES), len(PAYMENT_METHODS),
    )
    return True
