"""Invoice models"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from pydantic import BaseModel, Field

from gst_engine.constants import GstInvoiceType, GstTransactionType, MAX_GST_RATE
from gst_engine.models.tax import TaxBreakdown
from gst_engine.utils.money import round_money

STATE_CODE_PATTERN = r"^[0-9]{2}$"
GSTIN_PATTERN = r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$"
HSN_SAC_PATTERN = r"^[0-9]{2,8}$"


class GstInvoiceLineItem(BaseModel):
    """Invoice line item"""

    serial_no: int = Field(..., description="Line number", gt=0)
    description: str = Field(..., description="Item description", min_length=1)
    hsn_sac: Optional[str] = Field(
        None, description="HSN (2-8 digits) or SAC (6 digits) code", pattern=HSN_SAC_PATTERN
    )
    quantity: Decimal = Field(..., description="Quantity", gt=0)
    unit: str = Field(..., description="Unit of quantity code", min_length=1)
    unit_price: Decimal = Field(..., description="Tax-exclusive unit price", gt=0)
    discount_percent: Decimal = Field(
        Decimal("0"), description="Discount in percent of the gross amount", ge=0, le=100
    )
    gst_rate: Decimal = Field(..., description="GST rate in percent", ge=0, le=MAX_GST_RATE)
    cess_rate: Decimal = Field(Decimal("0"), description="Cess rate in percent", ge=0)
    is_service: bool = Field(False, description="SAC-classified service line")

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
    }


class GstInvoice(BaseModel):
    """GST invoice as supplied by the hosting layer"""

    invoice_number: str = Field(..., description="Invoice number", min_length=1)
    invoice_date: date = Field(..., description="Invoice date")
    invoice_type: GstInvoiceType = Field(GstInvoiceType.TAX_INVOICE, description="Invoice type")
    transaction_type: GstTransactionType = Field(
        GstTransactionType.B2B, description="Transaction type"
    )
    place_of_supply: str = Field(
        ..., description="2-digit state code of the place of supply", pattern=STATE_CODE_PATTERN
    )

    supplier_gstin: Optional[str] = Field(None, description="Supplier GSTIN", pattern=GSTIN_PATTERN)
    supplier_name: str = Field(..., description="Supplier name", min_length=1)
    supplier_address: Optional[str] = Field(None, description="Supplier address")
    supplier_state: str = Field(
        ..., description="Supplier 2-digit state code", pattern=STATE_CODE_PATTERN
    )

    customer_gstin: Optional[str] = Field(None, description="Customer GSTIN", pattern=GSTIN_PATTERN)
    customer_name: str = Field(..., description="Customer name", min_length=1)
    customer_address: Optional[str] = Field(None, description="Customer address")
    customer_state: str = Field(
        ..., description="Customer 2-digit state code", pattern=STATE_CODE_PATTERN
    )

    line_items: List[GstInvoiceLineItem] = Field(..., description="Line items", min_length=1)

    reverse_charge: bool = Field(False, description="Tax payable by the recipient")
    ecommerce_gstin: Optional[str] = Field(
        None, description="E-commerce operator GSTIN", pattern=GSTIN_PATTERN
    )
    notes: Optional[str] = Field(None, description="Free-form notes")

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
    }

    @property
    def is_inter_state(self) -> bool:
        return self.supplier_state != self.customer_state


class LineItemTaxResult(BaseModel):
    """Tax computed for one invoice line"""

    serial_no: int = Field(..., description="Line number of the source item")
    hsn_sac: Optional[str] = Field(None, description="Classification code of the source item")
    gross_amount: Decimal = Field(..., description="quantity x unit price")
    discount_amount: Decimal = Field(..., description="Discount taken off the gross amount")
    line_total: Decimal = Field(..., description="Gross amount less discount")
    is_service: bool = Field(False, description="Service line")
    reverse_charge: bool = Field(False, description="Reverse charge applies")
    breakdown: TaxBreakdown = Field(..., description="Tax computed on the line total")

    model_config = {"frozen": True}

    def rounded(self, places: int = 2, rounding: str = "ROUND_HALF_UP") -> "LineItemTaxResult":
        breakdown = self.breakdown.rounded(places, rounding)
        return self.model_copy(update={
            "breakdown": breakdown,
            "gross_amount": round_money(self.gross_amount, places, rounding),
            "discount_amount": round_money(self.discount_amount, places, rounding),
            "line_total": breakdown.taxable_amount,
        })


class InvoiceTotals(BaseModel):
    """Invoice-level totals"""

    total_taxable_amount: Decimal = Field(Decimal("0"), description="Sum of taxable amounts")
    total_cgst: Decimal = Field(Decimal("0"), description="Sum of CGST")
    total_sgst: Decimal = Field(Decimal("0"), description="Sum of SGST")
    total_igst: Decimal = Field(Decimal("0"), description="Sum of IGST")
    total_cess: Decimal = Field(Decimal("0"), description="Sum of cess")
    total_tax: Decimal = Field(Decimal("0"), description="Sum of total tax")
    total_invoice_amount: Decimal = Field(Decimal("0"), description="Grand total")

    model_config = {"frozen": True}

    @classmethod
    def from_breakdowns(cls, breakdowns: Iterable[TaxBreakdown]) -> "InvoiceTotals":
        """Elementwise sum of line breakdowns"""
        totals = {name: Decimal("0") for name in cls.model_fields}
        for b in breakdowns:
            totals["total_taxable_amount"] += b.taxable_amount
            totals["total_cgst"] += b.cgst
            totals["total_sgst"] += b.sgst
            totals["total_igst"] += b.igst
            totals["total_cess"] += b.cess
            totals["total_tax"] += b.total_tax
            totals["total_invoice_amount"] += b.total_amount
        return cls(**totals)


class InvoiceTaxResult(BaseModel):
    """Tax computed for a whole invoice"""

    line_item_calculations: List[LineItemTaxResult] = Field(
        ..., description="Per-line results in invoice order"
    )
    totals: InvoiceTotals = Field(..., description="Invoice totals")

    model_config = {"frozen": True}

    def rounded(self, places: int = 2, rounding: str = "ROUND_HALF_UP") -> "InvoiceTaxResult":
        """Round each line, then re-sum so totals match the printed lines"""
        lines = [line.rounded(places, rounding) for line in self.line_item_calculations]
        return InvoiceTaxResult(
            line_item_calculations=lines,
            totals=InvoiceTotals.from_breakdowns(line.breakdown for line in lines),
        )
