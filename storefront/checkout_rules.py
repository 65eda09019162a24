# storefront/checkout_rules.py
"""Which checkout fields a service needs.

A service is classified into one or more `ServiceKind`s (its explicit `kind`
tag, or every keyword found in its name), and the required fields are the
union of what each kind and the service's category demand. A name such as
"Comments & Likes Bundle" therefore needs everything both kinds need.
"""
from dataclasses import dataclass, field
from typing import Optional

from .config import Settings
from .schemas import CheckoutRequirements, Service, ServiceKind, TargetPurpose

# wire names of the checkout fields
PHONE = "customerPhone"
PLATFORM_USERNAME = "platformUsername"
TARGET_URL = "targetUrl"
PAYMENT_METHOD = "paymentMethodId"
SCREENSHOT = "screenshotUrl"

ALWAYS_REQUIRED = (PHONE, PAYMENT_METHOD, SCREENSHOT)

# keyword -> kind, in the order kinds are reported
NAME_KEYWORDS = (
    ("followers", ServiceKind.followers),
    ("subscribers", ServiceKind.subscribers),
    ("members", ServiceKind.members),
    ("likes", ServiceKind.likes),
    ("views", ServiceKind.views),
    ("comments", ServiceKind.comments),
)

ENGAGEMENT_KINDS = frozenset({ServiceKind.likes, ServiceKind.views, ServiceKind.comments})
ACCOUNT_KINDS = frozenset({ServiceKind.followers, ServiceKind.members})

# highest first
PURPOSE_PRECEDENCE = (TargetPurpose.delivery_email, TargetPurpose.channel_url, TargetPurpose.content_url)


@dataclass(frozen=True)
class CategoryIds:
    youtube: int = 2
    twitter: int = 5
    giftcard: int = 7

    @classmethod
    def from_settings(cls, settings: Settings) -> "CategoryIds":
        return cls(
            youtube=settings.youtube_category_id,
            twitter=settings.twitter_category_id,
            giftcard=settings.giftcard_category_id,
        )


@dataclass
class Requirements:
    kinds: list[ServiceKind]
    fields: list[str] = field(default_factory=list)
    target_purposes: set[TargetPurpose] = field(default_factory=set)

    def require(self, name: str) -> None:
        if name not in self.fields:
            self.fields.append(name)

    def require_target(self, purpose: TargetPurpose) -> None:
        self.require(TARGET_URL)
        self.target_purposes.add(purpose)

    @property
    def target_purpose(self) -> Optional[TargetPurpose]:
        for purpose in PURPOSE_PRECEDENCE:
            if purpose in self.target_purposes:
                return purpose
        return None

    def as_schema(self, service_id: int) -> CheckoutRequirements:
        return CheckoutRequirements(
            service_id=service_id,
            kinds=self.kinds,
            required_fields=self.fields,
            target_purpose=self.target_purpose,
        )


def classify(service: Service, categories: CategoryIds = CategoryIds()) -> list[ServiceKind]:
    if service.kind is not None:
        return [service.kind]
    name = service.name.lower()
    kinds = [kind for keyword, kind in NAME_KEYWORDS if keyword in name]
    if service.category_id == categories.giftcard:
        kinds.append(ServiceKind.giftcard)
    return kinds or [ServiceKind.other]


def required_fields(service: Service, categories: CategoryIds = CategoryIds()) -> Requirements:
    kinds = classify(service, categories)
    req = Requirements(kinds=kinds)
    for name in ALWAYS_REQUIRED:
        req.require(name)

    category = service.category_id
    is_giftcard = category == categories.giftcard or ServiceKind.giftcard in kinds

    if ACCOUNT_KINDS.intersection(kinds) or (
        ServiceKind.subscribers in kinds and category != categories.youtube
    ):
        req.require(PLATFORM_USERNAME)

    if ServiceKind.subscribers in kinds and category == categories.youtube:
        req.require_target(TargetPurpose.channel_url)

    if (ENGAGEMENT_KINDS.intersection(kinds) or category == categories.twitter) and not is_giftcard:
        req.require_target(TargetPurpose.content_url)

    if is_giftcard:
        req.require_target(TargetPurpose.delivery_email)

    return req


def missing_fields(req: Requirements, values: dict[str, Optional[str]]) -> list[str]:
    """Required fields whose value is absent or blank. `values` is keyed by wire name."""
    missing = []
    for name in req.fields:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
