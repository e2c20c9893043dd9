def test_intent_requires_non_empty_cart(client):
    res = client.post("/api/v1/checkout/intent")
    assert res.status_code == 400


def test_direct_intent_from_session_cart(client):
    client.post("/api/v1/cart/items", json={"product_id": "1"})
    client.post("/api/v1/cart/items", json={"product_id": "3"})
    res = client.post("/api/v1/checkout/intent")
    assert res.status_code == 200
    data = res.json()
    assert data["amount"] == 28998
    assert data["currencyCode"] == "USD"
    assert data["orderId"].startswith("order-")


def test_form_intent_with_billing_address(client):
    client.post("/api/v1/cart/items", json={"product_id": "4"})
    form = {
        "currencyCode": "CAD",
        "customerEmail": "ada@example.com",
        "customerName": "Ada Lovelace",
        "billingAddress": {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "addressLine1": "1 Main St",
            "city": "Toronto",
            "state": "ON",
            "zipCode": "M5V",
            "countryCode": "CA",
        },
    }
    data = client.post("/api/v1/checkout/intent", json=form).json()
    assert data["orderId"].startswith("ORDER-")
    assert data["amount"] == 4999
    assert data["currencyCode"] == "CAD"
    assert data["billingAddress"]["zipCode"] == "M5V"
    assert data["customerEmail"] == "ada@example.com"
