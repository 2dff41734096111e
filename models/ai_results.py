"""
Typed records returned by the AI gateway.

These are transient: built from a model reply, shown, then replaced by the
next call. Field aliases match the camelCase names declared in the output
schemas sent to the model.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from models.enums import Severity


class _AIRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ForecastResult(_AIRecord):
    item_id: str = Field(alias="itemId")
    item_name: str = Field(alias="itemName")
    predicted_demand: float = Field(alias="predictedDemand")
    recommended_order: float = Field(alias="recommendedOrder")
    reasoning: str


class InsightResult(_AIRecord):
    title: str
    insight: str
    actionable: str
    severity: Severity


class InvoiceLineItem(_AIRecord):
    description: str
    amount: float


class InvoiceData(_AIRecord):
    vendor_name: str = Field(alias="vendorName")
    invoice_date: str = Field(alias="invoiceDate")
    total_amount: float = Field(alias="totalAmount")
    line_items: List[InvoiceLineItem] = Field(alias="lineItems")
    confidence: float = Field(ge=0, le=1, description="0 to 1 confidence score")

    @property
    def first_item_description(self) -> str | None:
        if not self.line_items:
            return None
        return self.line_items[0].description or None
