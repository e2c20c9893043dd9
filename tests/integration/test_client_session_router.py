import json

import httpx

PAYLOAD = {"orderId": "order-1700000000500", "amount": 28998, "currencyCode": "USD"}


def test_missing_key_is_configuration_error_without_outbound_call(client, mock_primer, primer_session_ok):
    calls = mock_primer(primer_session_ok)
    res = client.post("/api/client-session", json=PAYLOAD)
    assert res.status_code == 500
    assert "not configured" in res.json()["error"]
    assert calls == []


def test_success_relays_token_and_order_id(client, primer_key, mock_primer):
    calls = mock_primer(lambda req: httpx.Response(200, json={"clientToken": "tok_live", "orderId": PAYLOAD["orderId"]}))
    res = client.post("/api/client-session", json=PAYLOAD)
    assert res.status_code == 200
    assert res.json() == {"clientToken": "tok_live", "orderId": PAYLOAD["orderId"]}

    sent = json.loads(calls[0].content)
    assert sent["order"]["countryCode"] == "US"
    assert sent["customer"]["emailAddress"] == "test@example.com"
    assert calls[0].headers["X-Api-Key"] == primer_key


def test_upstream_402_passes_details_verbatim(client, primer_key, mock_primer):
    upstream = {"error": {"errorId": "InsufficientFunds", "diagnosticsId": "d-1"}}
    mock_primer(lambda req: httpx.Response(402, json=upstream))
    res = client.post("/api/client-session", json=PAYLOAD)
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Failed to create client session"
    assert body["details"] == upstream


def test_upstream_timeout_is_504(client, primer_key, mock_primer):
    def _timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)
    mock_primer(_timeout)
    res = client.post("/api/client-session", json=PAYLOAD)
    assert res.status_code == 504
    assert res.json()["error"] == "Payment provider timed out"


def test_single_request_no_retry(client, primer_key, mock_primer):
    calls = mock_primer(lambda req: httpx.Response(500, json={"error": "boom"}))
    client.post("/api/client-session", json=PAYLOAD)
    assert len(calls) == 1


def test_invalid_payload_is_rejected(client, primer_key, mock_primer, primer_session_ok):
    calls = mock_primer(primer_session_ok)
    res = client.post("/api/client-session", json={"amount": "abc"})
    assert res.status_code == 422
    assert calls == []


def test_get_not_allowed(client):
    assert client.get("/api/client-session").status_code == 405


def test_payment_status_relays_provider_body(client, primer_key, mock_primer):
    payment = {"id": "pay_1", "status": "SETTLED", "orderId": "order-1"}
    calls = mock_primer(lambda req: httpx.Response(200, json=payment))
    res = client.post("/api/payment-status", json={"paymentId": "pay_1", "orderId": "order-1"})
    assert res.status_code == 200
    assert res.json() == payment
    assert calls[0].method == "GET"
    assert calls[0].url.path == "/payments/pay_1"


def test_payment_status_blank_id_is_400(client, primer_key):
    res = client.post("/api/payment-status", json={"paymentId": "  "})
    assert res.status_code == 400


def test_payment_status_upstream_error(client, primer_key, mock_primer):
    mock_primer(lambda req: httpx.Response(404, json={"error": "not found"}))
    res = client.post("/api/payment-status", json={"paymentId": "pay_x"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to fetch payment", "details": {"error": "not found"}}
