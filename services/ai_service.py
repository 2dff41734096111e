"""
AI gateway for the dashboard.

Uses OpenAI (or any compatible endpoint) to produce inventory forecasts,
financial insights and structured invoice data. Each call declares a strict
JSON schema for the reply, so the answer is parsed, not scraped.

A failed call never reaches the caller: transport errors, refusals, bad
JSON and schema mismatches are logged and turned into [] or None.
"""

import json
import logging

from openai import OpenAI
from pydantic import TypeAdapter, ValidationError

from core.config import settings
from models.ai_results import ForecastResult, InsightResult, InvoiceData
from models.enums import Severity

logger = logging.getLogger(__name__)

INSIGHT_COUNT = 3
SAFETY_BUFFER = 0.20

_client = None


class AIGatewayError(Exception):
    """The model call failed or its reply could not be used."""


def get_client():
    """Shared OpenAI client, created on first use.

    A missing OPENAI_API_KEY is not checked here; the SDK raises and the
    gateway reports it like any other failed call.
    """
    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.openai_api_key, timeout=settings.ai_timeout)
    return _client


# ------------------------------------------
# Output schemas
# ------------------------------------------
def _object(properties: dict) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


FORECAST_SCHEMA = _object({
    "forecasts": {
        "type": "array",
        "items": _object({
            "itemId": {"type": "string"},
            "itemName": {"type": "string"},
            "predictedDemand": {"type": "number"},
            "recommendedOrder": {"type": "number"},
            "reasoning": {"type": "string"},
        }),
    },
})

INSIGHT_SCHEMA = _object({
    "insights": {
        "type": "array",
        "items": _object({
            "title": {"type": "string"},
            "insight": {"type": "string"},
            "actionable": {"type": "string"},
            "severity": {"type": "string", "enum": Severity.values()},
        }),
    },
})

INVOICE_SCHEMA = _object({
    "vendorName": {"type": "string"},
    "invoiceDate": {"type": "string", "description": "YYYY-MM-DD, empty if unknown"},
    "totalAmount": {"type": "number"},
    "lineItems": {
        "type": "array",
        "items": _object({
            "description": {"type": "string"},
            "amount": {"type": "number"},
        }),
    },
    "confidence": {"type": "number", "description": "0 to 1 confidence score"},
})

_forecast_list = TypeAdapter(list[ForecastResult])
_insight_list = TypeAdapter(list[InsightResult])


# ------------------------------------------
# Request / response plumbing
# ------------------------------------------
def _snapshot(records) -> str:
    rows = [r.to_dict() if hasattr(r, "to_dict") else dict(r) for r in records]
    return json.dumps(rows, default=str)


def _request_json(client, system: str, prompt: str, schema_name: str, schema: dict) -> dict:
    """Send one structured-output request and return the decoded reply."""
    logger.debug("AI request %s (%d prompt chars)", schema_name, len(prompt))
    try:
        client = client or get_client()
        completion = client.chat.completions.create(
            model=settings.ai_model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "strict": True, "schema": schema},
            },
            temperature=0.3,
        )
    except Exception as e:
        raise AIGatewayError(f"{schema_name} request failed: {e}") from e

    try:
        message = completion.choices[0].message
    except (AttributeError, IndexError, TypeError) as e:
        raise AIGatewayError(f"{schema_name} reply had no message") from e

    if getattr(message, "refusal", None):
        raise AIGatewayError(f"{schema_name} request refused: {message.refusal}")
    text = getattr(message, "content", None)
    if not text:
        raise AIGatewayError(f"{schema_name} reply was empty")

    try:
        data = json.loads(text)
    except ValueError as e:
        raise AIGatewayError(f"{schema_name} reply was not JSON") from e
    if not isinstance(data, dict):
        raise AIGatewayError(f"{schema_name} reply was not a JSON object")
    return data


def _validate(adapter_or_model, value, what: str):
    try:
        if isinstance(adapter_or_model, TypeAdapter):
            return adapter_or_model.validate_python(value)
        return adapter_or_model.model_validate(value)
    except ValidationError as e:
        raise AIGatewayError(f"{what} did not match the schema: {e.error_count()} error(s)") from e


# ------------------------------------------
# Inventory forecast
# ------------------------------------------
def _item_id(item):
    if hasattr(item, "item_id"):
        return item.item_id
    return item["id"]


def _forecast(items, client=None):
    items = list(items)
    prompt = f"""Analyze the following hospital inventory data.
Based on current_stock, reorder_level and last_usage_rate (units per week),
predict the demand for the next month and recommend an order quantity for each item.
Consider a safety stock buffer of {int(SAFETY_BUFFER * 100)}%.
Return exactly {len(items)} forecasts, one per item, using each item's id as itemId.

Inventory Data: {_snapshot(items)}"""

    data = _request_json(
        client,
        "You are a hospital supply chain analyst. Reply only with the requested JSON.",
        prompt,
        "inventory_forecast",
        FORECAST_SCHEMA,
    )
    results = _validate(_forecast_list, data.get("forecasts"), "Forecast reply")
    if len(results) != len(items):
        raise AIGatewayError(f"Expected {len(items)} forecasts, got {len(results)}")
    expected = {_item_id(item) for item in items}
    returned = {r.item_id for r in results}
    if returned != expected:
        raise AIGatewayError(
            f"Forecast ids {sorted(returned)} do not match inventory ids {sorted(expected)}"
        )
    return results


def forecast_inventory(items, client=None) -> list[ForecastResult]:
    """Demand forecast and reorder recommendation per inventory item."""
    items = list(items)
    if not items:
        return []
    try:
        return _forecast(items, client)
    except AIGatewayError as e:
        logger.error("Error predicting inventory: %s", e)
        return []


# ------------------------------------------
# Financial insights
# ------------------------------------------
def _insights(transactions, client=None):
    # Keep the prompt bounded: only the most recent entries are sent
    recent = list(transactions)[: settings.insight_window]
    prompt = f"""Analyze these recent hospital financial transactions.
Identify anomalies, cost-saving opportunities, or revenue trends.
Provide exactly {INSIGHT_COUNT} concise, high-impact strategic insights.
Rate each insight's severity as low, medium or high.

Transactions: {_snapshot(recent)}"""

    data = _request_json(
        client,
        "You are a Chief Financial Officer AI assistant. Reply only with the requested JSON.",
        prompt,
        "financial_insights",
        INSIGHT_SCHEMA,
    )
    results = _validate(_insight_list, data.get("insights"), "Insight reply")
    if len(results) != INSIGHT_COUNT:
        raise AIGatewayError(f"Expected {INSIGHT_COUNT} insights, got {len(results)}")
    return results


def analyze_financials(transactions, client=None) -> list[InsightResult]:
    """Three strategic insights over the most recent ledger entries."""
    transactions = list(transactions)
    if not transactions:
        return []
    try:
        return _insights(transactions, client)
    except AIGatewayError as e:
        logger.error("Error analyzing financials: %s", e)
        return []


# ------------------------------------------
# Invoice extraction
# ------------------------------------------
def extract_invoice(raw_text: str, client=None) -> InvoiceData | None:
    """Structure free-form invoice text. None means nothing usable came back."""
    if not (raw_text or "").strip():
        return None

    prompt = f"""Extract valid invoice data from the following unstructured text.
Use YYYY-MM-DD for invoiceDate, or an empty string if no date is present.
If data is missing, estimate confidence as low.

Invoice Text: {json.dumps(raw_text)}"""

    try:
        data = _request_json(
            client,
            "You are an accounts payable clerk. Reply only with the requested JSON.",
            prompt,
            "invoice_extraction",
            INVOICE_SCHEMA,
        )
        return _validate(InvoiceData, data, "Invoice reply")
    except AIGatewayError as e:
        logger.error("Error parsing invoice: %s", e)
        return None
