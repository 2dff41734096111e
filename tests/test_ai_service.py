import dataclasses
import json

import httpx
import openai
import pytest

from models.enums import Severity
from services import ai_service

INVENTORY = [
    {"id": "INV-001", "name": "Amoxicillin 500mg", "current_stock": 120, "reorder_level": 150, "last_usage_rate": 45},
    {"id": "INV-002", "name": "Surgical Masks", "current_stock": 4500, "reorder_level": 1000, "last_usage_rate": 500},
]


def forecast(item_id, name, **overrides):
    row = {
        "itemId": item_id,
        "itemName": name,
        "predictedDemand": 200,
        "recommendedOrder": 120,
        "reasoning": "Usage outpaces stock.",
    }
    row.update(overrides)
    return row


def insight(title, severity="medium"):
    return {"title": title, "insight": "Costs rose.", "actionable": "Renegotiate.", "severity": severity}


INVOICE_REPLY = {
    "vendorName": "MedSupply Corp",
    "invoiceDate": "2023-10-25",
    "totalAmount": 500,
    "lineItems": [{"description": "Surgical Gloves (50 boxes)", "amount": 500}],
    "confidence": 0.92,
}


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))


# ------------------------------------------
# Inventory forecast
# ------------------------------------------
def test_forecast_parses_one_result_per_item(fake_client):
    client = fake_client(reply={"forecasts": [forecast("INV-001", "Amoxicillin 500mg"), forecast("INV-002", "Surgical Masks")]})

    results = ai_service.forecast_inventory(INVENTORY, client=client)

    assert [r.item_id for r in results] == ["INV-001", "INV-002"]
    assert results[0].predicted_demand == 200
    assert results[0].recommended_order == 120


def test_forecast_request_declares_strict_schema(fake_client):
    client = fake_client(reply={"forecasts": [forecast("INV-001", "a"), forecast("INV-002", "b")]})
    ai_service.forecast_inventory(INVENTORY, client=client)

    request = client.calls[0]
    assert request["response_format"]["type"] == "json_schema"
    assert request["response_format"]["json_schema"]["strict"] is True
    item_schema = client.last_schema()["properties"]["forecasts"]["items"]
    assert set(item_schema["required"]) == {"itemId", "itemName", "predictedDemand", "recommendedOrder", "reasoning"}
    prompt = client.last_prompt()
    assert "exactly 2 forecasts" in prompt
    assert "INV-002" in prompt


def test_forecast_missing_field_is_a_failure_not_partial(fake_client):
    broken = forecast("INV-002", "Surgical Masks")
    del broken["reasoning"]
    client = fake_client(reply={"forecasts": [forecast("INV-001", "Amoxicillin 500mg"), broken]})

    assert ai_service.forecast_inventory(INVENTORY, client=client) == []


def test_forecast_count_mismatch_is_a_failure(fake_client):
    client = fake_client(reply={"forecasts": [forecast("INV-001", "Amoxicillin 500mg")]})
    assert ai_service.forecast_inventory(INVENTORY, client=client) == []


def test_forecast_transport_failure_returns_empty(fake_client, caplog):
    client = fake_client(error=connection_error())
    assert ai_service.forecast_inventory(INVENTORY, client=client) == []
    assert "Error predicting inventory" in caplog.text


def test_forecast_empty_inventory_skips_the_call(fake_client):
    client = fake_client(error=AssertionError("should not be called"))
    assert ai_service.forecast_inventory([], client=client) == []
    assert client.calls == []


# ------------------------------------------
# Financial insights
# ------------------------------------------
def test_insights_parse_three_results(fake_client):
    client = fake_client(reply={"insights": [insight("A", "low"), insight("B", "medium"), insight("C", "high")]})

    results = ai_service.analyze_financials([{"id": "TXN-1", "amount": 10}], client=client)

    assert [r.severity for r in results] == [Severity.LOW, Severity.MEDIUM, Severity.HIGH]
    assert results[0].title == "A"


def test_insights_send_only_the_most_recent_50(fake_client):
    txns = [{"id": f"TXN-{i:04d}", "amount": i} for i in range(80)]
    client = fake_client(reply={"insights": [insight("A"), insight("B"), insight("C")]})

    ai_service.analyze_financials(txns, client=client)

    prompt = client.last_prompt()
    sent = json.loads(prompt.split("Transactions: ", 1)[1])
    assert len(sent) == 50
    assert sent[0]["id"] == "TXN-0000"
    assert "TXN-0050" not in prompt


def test_insight_schema_constrains_severity(fake_client):
    client = fake_client(reply={"insights": [insight("A"), insight("B"), insight("C")]})
    ai_service.analyze_financials([{"id": "TXN-1"}], client=client)
    severity = client.last_schema()["properties"]["insights"]["items"]["properties"]["severity"]
    assert severity["enum"] == ["low", "medium", "high"]


@pytest.mark.parametrize(
    "reply",
    [
        {"insights": [insight("A"), insight("B"), insight("C", "critical")]},
        {"insights": [insight("A"), insight("B")]},
        {"summary": "no insights key"},
        "not json at all",
        None,
    ],
)
def test_insights_bad_replies_return_empty(fake_client, reply):
    client = fake_client(reply=reply)
    assert ai_service.analyze_financials([{"id": "TXN-1"}], client=client) == []


def test_insights_transport_failure_returns_empty(fake_client):
    client = fake_client(error=connection_error())
    assert ai_service.analyze_financials([{"id": "TXN-1"}], client=client) == []


# ------------------------------------------
# Invoice extraction
# ------------------------------------------
def test_extract_invoice(fake_client):
    client = fake_client(reply=INVOICE_REPLY)

    invoice = ai_service.extract_invoice("Vendor: MedSupply Corp\nTotal: $500", client=client)

    assert invoice.vendor_name == "MedSupply Corp"
    assert invoice.total_amount == 500
    assert invoice.line_items[0].description == "Surgical Gloves (50 boxes)"
    assert invoice.confidence == pytest.approx(0.92)
    assert "MedSupply Corp" in client.last_prompt()


def test_extract_invoice_transport_failure_returns_none(fake_client):
    client = fake_client(error=connection_error())
    assert ai_service.extract_invoice("Vendor: X", client=client) is None


def test_extract_invoice_refusal_returns_none(fake_client):
    client = fake_client(reply=None, refusal="I can't help with that.")
    assert ai_service.extract_invoice("Vendor: X", client=client) is None


def test_extract_invoice_confidence_out_of_range_returns_none(fake_client):
    client = fake_client(reply=dict(INVOICE_REPLY, confidence=1.5))
    assert ai_service.extract_invoice("Vendor: X", client=client) is None


def test_extract_invoice_missing_field_returns_none(fake_client):
    reply = dict(INVOICE_REPLY)
    del reply["totalAmount"]
    client = fake_client(reply=reply)
    assert ai_service.extract_invoice("Vendor: X", client=client) is None


def test_extract_invoice_blank_text_skips_the_call(fake_client):
    client = fake_client(reply=INVOICE_REPLY)
    assert ai_service.extract_invoice("   ", client=client) is None
    assert client.calls == []


def test_unexpected_client_error_is_contained(fake_client):
    client = fake_client(error=RuntimeError("boom"))
    assert ai_service.forecast_inventory(INVENTORY, client=client) == []
    assert ai_service.analyze_financials([{"id": "TXN-1"}], client=client) == []
    assert ai_service.extract_invoice("text", client=client) is None


def test_model_comes_from_settings(fake_client, monkeypatch):
    monkeypatch.setattr(ai_service, "settings", dataclasses.replace(ai_service.settings, ai_model="test-model"))
    client = fake_client(reply=INVOICE_REPLY)
    ai_service.extract_invoice("Vendor: X", client=client)
    assert client.calls[0]["model"] == "test-model"


def test_forecast_with_unknown_item_ids_is_a_failure(fake_client):
    client = fake_client(reply={"forecasts": [forecast("INV-999", "Ghost"), forecast("INV-999", "Ghost")]})
    assert ai_service.forecast_inventory(INVENTORY, client=client) == []


def test_forecast_with_duplicate_item_ids_is_a_failure(fake_client):
    client = fake_client(reply={"forecasts": [forecast("INV-001", "a"), forecast("INV-001", "a")]})
    assert ai_service.forecast_inventory(INVENTORY, client=client) == []


def test_missing_api_key_is_a_failed_call(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(ai_service, "settings", dataclasses.replace(ai_service.settings, openai_api_key=None))
    monkeypatch.setattr(ai_service, "_client", None)

    assert ai_service.forecast_inventory(INVENTORY) == []
    assert ai_service.analyze_financials([{"id": "TXN-1", "amount": 10}]) == []
    assert ai_service.extract_invoice("Vendor: Acme\nTotal: $500") is None
