import pytest

from storefront.checkout_rules import (
    PAYMENT_METHOD, PHONE, PLATFORM_USERNAME, SCREENSHOT, TARGET_URL,
    CategoryIds, classify, missing_fields, required_fields,
)
from storefront.schemas import Service, ServiceKind, TargetPurpose


def make_service(name, category_id=1, kind=None):
    return Service(id=1, name=name, description="", price=100, category_id=category_id, kind=kind)


@pytest.mark.parametrize("name", ["TikTok Followers (1000)", "Instagram FOLLOWERS", "Telegram Members (500)"])
def test_account_services_need_platform_username(name):
    req = required_fields(make_service(name, category_id=3))
    assert PLATFORM_USERNAME in req.fields
    assert TARGET_URL not in req.fields


def test_phone_payment_and_screenshot_always_required():
    req = required_fields(make_service("Netflix Premium (1 Month)", category_id=6))
    assert req.fields == [PHONE, PAYMENT_METHOD, SCREENSHOT]
    assert req.kinds == [ServiceKind.other]
    assert req.target_purpose is None


def test_youtube_subscribers_need_channel_url_not_username():
    req = required_fields(make_service("YouTube Subscribers (500)", category_id=2))
    assert TARGET_URL in req.fields
    assert PLATFORM_USERNAME not in req.fields
    assert req.target_purpose is TargetPurpose.channel_url


def test_subscribers_outside_youtube_need_username():
    req = required_fields(make_service("Twitch Subscribers", category_id=6))
    assert PLATFORM_USERNAME in req.fields
    assert TARGET_URL not in req.fields


@pytest.mark.parametrize("name", ["TikTok Likes", "Instagram Views", "Facebook Comments"])
def test_engagement_services_need_content_url(name):
    req = required_fields(make_service(name, category_id=1))
    assert TARGET_URL in req.fields
    assert req.target_purpose is TargetPurpose.content_url


def test_every_twitter_service_needs_post_url():
    req = required_fields(make_service("Twitter/X Retweets (100)", category_id=5))
    assert TARGET_URL in req.fields
    assert req.target_purpose is TargetPurpose.content_url


def test_twitter_followers_need_username_and_url():
    req = required_fields(make_service("Twitter/X Followers (500)", category_id=5))
    assert PLATFORM_USERNAME in req.fields
    assert TARGET_URL in req.fields


@pytest.mark.parametrize("name", ["Amazon Gift Card ($25)", "Gift card with free likes", "Steam Views Voucher"])
def test_gift_cards_need_delivery_email_whatever_the_name(name):
    req = required_fields(make_service(name, category_id=7))
    assert TARGET_URL in req.fields
    assert req.target_purpose is TargetPurpose.delivery_email
    assert ServiceKind.giftcard in req.kinds


def test_names_matching_several_keywords_take_the_union():
    req = required_fields(make_service("Comments & Likes Bundle + Followers", category_id=3))
    assert req.kinds == [ServiceKind.followers, ServiceKind.likes, ServiceKind.comments]
    assert PLATFORM_USERNAME in req.fields
    assert TARGET_URL in req.fields
    assert req.fields.count(TARGET_URL) == 1


def test_explicit_kind_overrides_name_keywords():
    service = make_service("Mega Likes Pack", category_id=1, kind=ServiceKind.followers)
    assert classify(service) == [ServiceKind.followers]
    req = required_fields(service)
    assert PLATFORM_USERNAME in req.fields
    assert TARGET_URL not in req.fields


def test_explicit_giftcard_kind_outside_giftcard_category():
    req = required_fields(make_service("Spotify Voucher", category_id=6, kind=ServiceKind.giftcard))
    assert req.target_purpose is TargetPurpose.delivery_email


def test_category_ids_are_configurable():
    ids = CategoryIds(youtube=12, twitter=15, giftcard=17)
    req = required_fields(make_service("Channel Subscribers", category_id=12), ids)
    assert req.target_purpose is TargetPurpose.channel_url
    assert PLATFORM_USERNAME not in req.fields


def test_missing_fields_treats_blank_as_missing():
    req = required_fields(make_service("TikTok Followers", category_id=1))
    values = {PHONE: "  ", PLATFORM_USERNAME: None, SCREENSHOT: "https://x/y.png", PAYMENT_METHOD: "1"}
    assert missing_fields(req, values) == [PHONE, PLATFORM_USERNAME]


def test_requirements_schema_uses_wire_names():
    req = required_fields(make_service("YouTube Subscribers", category_id=2))
    body = req.as_schema(service_id=4).model_dump(mode="json", by_alias=True)
    assert body["serviceId"] == 4
    assert body["targetPurpose"] == "channelUrl"
    assert "targetUrl" in body["requiredFields"]
    assert body["kinds"] == ["subscribers"]
