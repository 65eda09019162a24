from datetime import datetime, timezone

import pytest

from storefront.config import Settings
from storefront.errors import NotFoundError, ValidationError
from storefront.order_workflow import OrderWorkflow, is_valid_screenshot
from storefront.schemas import OrderStatus, ServiceUpdate, TargetPurpose

from tests.conftest import PNG_DATA_URL, service_named


@pytest.fixture
def workflow(seeded, settings):
    return OrderWorkflow(seeded, settings)


async def test_followers_order_snapshot(workflow, seeded):
    service = await service_named(seeded, "TikTok Followers (1000)")
    before = datetime.now(timezone.utc)

    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL,
        phone="0911111111", platform_username="myhandle",
    )

    assert order.amount == 450
    assert order.status is OrderStatus.pending
    assert order.service_name == "TikTok Followers (1000)"
    assert order.payment_method == "Telebirr"
    assert order.screenshot_url == PNG_DATA_URL
    assert order.target_url is None and order.target_purpose is None
    assert order.created_at >= before


async def test_followers_order_without_username_fails(workflow, seeded):
    service = await service_named(seeded, "TikTok Followers (1000)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(
            service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911111111",
        )
    assert exc.value.fields == ["platformUsername"]
    assert await seeded.list_orders() == []


async def test_missing_phone_and_screenshot_reported_together(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(service_id=service.id, payment_method_id=1, screenshot="", phone=None)
    assert exc.value.fields == ["customerPhone", "screenshotUrl"]


async def test_youtube_subscribers_need_channel_url(workflow, seeded):
    service = await service_named(seeded, "YouTube Subscribers (500)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(
            service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
        )
    assert exc.value.fields == ["targetUrl"]

    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
        target_url="https://youtube.com/@mychannel",
    )
    assert order.target_purpose is TargetPurpose.channel_url
    assert order.platform_username is None


async def test_gift_card_needs_valid_email(workflow, seeded):
    service = await service_named(seeded, "Amazon Gift Card ($25)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(
            service_id=service.id, payment_method_id=2, screenshot=PNG_DATA_URL, phone="0911",
            target_url="not-an-email",
        )
    assert exc.value.fields == ["targetUrl"]

    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=2, screenshot=PNG_DATA_URL, phone="0911",
        target_url="buyer@example.com",
    )
    assert order.target_url == "buyer@example.com"
    assert order.target_purpose is TargetPurpose.delivery_email
    assert order.payment_method == "CBE Birr"


async def test_unknown_service_or_payment_method(workflow, seeded):
    with pytest.raises(NotFoundError):
        await workflow.submit_order(service_id=999, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911")
    with pytest.raises(NotFoundError):
        await workflow.submit_order(service_id=1, payment_method_id=999, screenshot=PNG_DATA_URL, phone="0911")


async def test_bad_screenshot_rejected(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(
            service_id=service.id, payment_method_id=1, screenshot="screenshot.png", phone="0911",
        )
    assert exc.value.fields == ["screenshotUrl"]


def test_screenshot_forms():
    assert is_valid_screenshot(PNG_DATA_URL)
    assert is_valid_screenshot("https://cdn.example.com/proof/123.jpg")
    assert not is_valid_screenshot("data:text/plain;base64,aGVsbG8=")
    assert not is_valid_screenshot("ftp://example.com/a.png")
    assert not is_valid_screenshot("https://")


def test_screenshot_data_url_parameters_and_url_safe_base64():
    assert is_valid_screenshot("data:image/jpeg;name=a.jpg;base64,/9j/4AAQSkZJRg==")
    assert is_valid_screenshot("data:image/png;base64,iVBORw0K-_GgoAAA")
    assert is_valid_screenshot("data:image/webp;charset=binary;name=proof.webp;base64,UklGRg==")
    assert not is_valid_screenshot("data:image/png;name=a.png,iVBORw0K")
    assert not is_valid_screenshot("data:image/png;base64,<script>")


async def test_identical_submissions_create_separate_orders(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    kwargs = dict(service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911")
    first = await workflow.submit_order(**kwargs)
    second = await workflow.submit_order(**kwargs)
    assert first.id != second.id
    assert len(await seeded.list_orders()) == 2


async def test_later_price_change_does_not_touch_order(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
    )
    await seeded.update_service(service.id, ServiceUpdate(price=5000, name="Netflix Ultra"))

    stored = await seeded.get_order(order.id)
    assert stored.amount == 900
    assert stored.service_name == "Netflix Premium (1 Month)"


async def test_set_order_status_is_idempotent(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
    )
    first = await workflow.set_order_status(order.id, "approved")
    second = await workflow.set_order_status(order.id, "approved")
    assert first.status is OrderStatus.approved
    assert second == first


async def test_permissive_transitions_by_default(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
    )
    await workflow.set_order_status(order.id, OrderStatus.rejected)
    reopened = await workflow.set_order_status(order.id, OrderStatus.pending)
    assert reopened.status is OrderStatus.pending


async def test_strict_transitions(seeded):
    workflow = OrderWorkflow(seeded, Settings(strict_order_transitions=True))
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    order = await workflow.submit_order(
        service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="0911",
    )
    await workflow.set_order_status(order.id, "approved")
    # same state again is fine
    await workflow.set_order_status(order.id, "approved")
    with pytest.raises(ValidationError):
        await workflow.set_order_status(order.id, "pending")


async def test_set_order_status_validation(workflow, seeded):
    with pytest.raises(ValidationError) as exc:
        await workflow.set_order_status(1, "shipped")
    assert exc.value.fields == ["status"]
    with pytest.raises(NotFoundError):
        await workflow.set_order_status(999, "approved")


async def test_checkout_requirements(workflow, seeded):
    service = await service_named(seeded, "Twitter/X Followers (500)")
    req = await workflow.checkout_requirements(service.id)
    assert "platformUsername" in req.required_fields
    assert "targetUrl" in req.required_fields
    assert req.target_purpose is TargetPurpose.content_url
    with pytest.raises(NotFoundError):
        await workflow.checkout_requirements(999)


async def test_overlong_phone_is_a_validation_error(workflow, seeded):
    service = await service_named(seeded, "Netflix Premium (1 Month)")
    with pytest.raises(ValidationError) as exc:
        await workflow.submit_order(
            service_id=service.id, payment_method_id=1, screenshot=PNG_DATA_URL, phone="9" * 101,
        )
    assert exc.value.fields == ["customerPhone"]
    assert await seeded.list_orders() == []
