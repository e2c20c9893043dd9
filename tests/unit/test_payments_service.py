import pytest

from storefront.checkout.models import BillingAddress, CheckoutIntent
from storefront.payments import service as payments_service
from storefront.payments.errors import ConfigurationError, UpstreamError


def _intent(**kw):
    base = {"order_id": "order-1", "amount": 28998, "currency_code": "USD"}
    base.update(kw)
    return CheckoutIntent(**base)


def test_build_session_request_applies_defaults():
    body = payments_service.build_session_request(_intent())
    assert body["orderId"] == "order-1"
    assert body["amount"] == 28998
    assert body["currencyCode"] == "USD"
    assert body["order"]["countryCode"] == "US"
    assert body["order"]["lineItems"] == [
        {"itemId": "test-item", "description": "Test Product", "amount": 28998, "quantity": 1}
    ]
    assert body["customer"] == {"emailAddress": "test@example.com"}
    assert body["metadata"]["source"] == "sandbox-testing"


def test_build_session_request_uses_billing_fields():
    address = BillingAddress(first_name="Ada", last_name="Lovelace", city="London", zip_code="N1", country_code="GB")
    body = payments_service.build_session_request(
        _intent(customer_email="ada@example.com", billing_address=address)
    )
    assert body["order"]["countryCode"] == "GB"
    customer = body["customer"]
    assert customer["emailAddress"] == "ada@example.com"
    assert customer["firstName"] == "Ada"
    assert customer["lastName"] == "Lovelace"
    assert customer["billingAddress"] == {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "city": "London",
        "postalCode": "N1",
        "countryCode": "GB",
    }


def test_customer_name_is_split_when_no_billing_names():
    body = payments_service.build_session_request(_intent(customer_name="Grace Brewster Hopper"))
    assert body["customer"]["firstName"] == "Grace"
    assert body["customer"]["lastName"] == "Brewster Hopper"


def test_create_client_session_without_key_makes_no_call(monkeypatch):
    def _boom(body):
        raise AssertionError("aucun appel sortant attendu")
    monkeypatch.setattr("storefront.payments.service.primer_client.create_client_session", _boom)
    with pytest.raises(ConfigurationError):
        payments_service.create_client_session(_intent())


def test_create_client_session_relays_token(primer_key, monkeypatch):
    seen = {}
    def _fake(body):
        seen["body"] = body
        return {"clientToken": "tok_1", "orderId": "order-1", "expirationDate": "later"}
    monkeypatch.setattr("storefront.payments.service.primer_client.create_client_session", _fake)
    result = payments_service.create_client_session(_intent())
    assert result == {"clientToken": "tok_1", "orderId": "order-1"}
    assert seen["body"]["orderId"] == "order-1"


def test_missing_client_token_is_upstream_error(primer_key, monkeypatch):
    monkeypatch.setattr(
        "storefront.payments.service.primer_client.create_client_session",
        lambda body: {"orderId": "order-1"},
    )
    with pytest.raises(UpstreamError) as exc:
        payments_service.create_client_session(_intent())
    assert exc.value.details == {"orderId": "order-1"}


def test_fetch_payment_status_requires_id():
    with pytest.raises(ValueError):
        payments_service.fetch_payment_status("  ")
