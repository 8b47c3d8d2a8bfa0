"""Tax calculation models"""

from decimal import Decimal
from pydantic import BaseModel, Field

from gst_engine.utils.money import round_money


class TaxCalculationInput(BaseModel):
    """
    Input to a single GST calculation

    Ranges are checked by the calculator, not here, so that bad input
    raises the typed calculation errors instead of a schema error.
    """

    amount: Decimal = Field(..., description="Amount to tax (or gross amount when inclusive)")
    gst_rate: Decimal = Field(..., description="GST rate in percent")
    is_inclusive: bool = Field(False, description="Amount already includes GST and cess")
    is_inter_state: bool = Field(False, description="Supply crosses state lines (IGST)")
    cess_rate: Decimal = Field(Decimal("0"), description="Cess rate in percent")
    apply_reverse_charge: bool = Field(
        False, description="Recipient pays the tax; carried through, no arithmetic effect"
    )

    model_config = {"frozen": True}


class TaxBreakdown(BaseModel):
    """
    Result of a single GST calculation

    Intra-state supplies split the GST equally into CGST and SGST;
    inter-state supplies carry it entirely as IGST.
    """

    taxable_amount: Decimal = Field(..., description="Value the tax is levied on")
    cgst: Decimal = Field(..., description="Central GST")
    sgst: Decimal = Field(..., description="State GST")
    igst: Decimal = Field(..., description="Integrated GST")
    cess: Decimal = Field(..., description="Compensation cess")
    total_tax: Decimal = Field(..., description="cgst + sgst + igst + cess")
    total_amount: Decimal = Field(..., description="taxable_amount + total_tax")
    gst_rate: Decimal = Field(..., description="GST rate applied")
    cess_rate: Decimal = Field(Decimal("0"), description="Cess rate applied")
    is_inter_state: bool = Field(..., description="IGST applied instead of CGST/SGST")
    is_inclusive: bool = Field(..., description="Input amount included tax")
    apply_reverse_charge: bool = Field(False, description="Reverse charge flag from the input")

    model_config = {"frozen": True}

    @property
    def gst_amount(self) -> Decimal:
        """GST excluding cess"""
        return self.cgst + self.sgst + self.igst

    def rounded(self, places: int = 2, rounding: str = "ROUND_HALF_UP") -> "TaxBreakdown":
        """
        Round every component and re-derive the totals from the rounded parts

        The totals of the copy are the exact sums of its displayed
        components, which is what appears on a printed invoice.

        An inclusive breakdown keeps the rounded gross amount the caller
        quoted: total tax is the gross less the rounded taxable value, and
        any paise left over from rounding the parts go to the largest
        component.
        """
        taxable = round_money(self.taxable_amount, places, rounding)
        parts = {
            name: round_money(getattr(self, name), places, rounding)
            for name in ("igst", "sgst", "cgst", "cess")
        }

        if self.is_inclusive:
            total_amount = round_money(self.total_amount, places, rounding)
            total_tax = total_amount - taxable
            leftover = total_tax - sum(parts.values())
            if leftover:
                largest = max(parts, key=lambda name: parts[name])
                parts[largest] += leftover
        else:
            total_tax = sum(parts.values())
            total_amount = taxable + total_tax

        return self.model_copy(update={
            "taxable_amount": taxable,
            **parts,
            "total_tax": total_tax,
            "total_amount": total_amount,
        })


class ReverseGstResult(BaseModel):
    """Base and tax extracted from a GST-inclusive amount"""

    taxable_amount: Decimal = Field(..., description="Amount before GST")
    gst_amount: Decimal = Field(..., description="GST contained in the gross amount")

    model_config = {"frozen": True}

    @property
    def gross_amount(self) -> Decimal:
        return self.taxable_amount + self.gst_amount

    def rounded(self, places: int = 2, rounding: str = "ROUND_HALF_UP") -> "ReverseGstResult":
        # GST is the remainder so the parts still add up to the gross figure
        gross = round_money(self.gross_amount, places, rounding)
        taxable = round_money(self.taxable_amount, places, rounding)
        return ReverseGstResult(taxable_amount=taxable, gst_amount=gross - taxable)


class Supply(BaseModel):
    """One component of a mixed supply"""

    amount: Decimal = Field(..., description="Value of the supply")
    gst_rate: Decimal = Field(..., description="GST rate in percent")

    model_config = {"frozen": True}


class TdsResult(BaseModel):
    """TDS withheld on the GST portion of a payment"""

    taxable_amount: Decimal = Field(..., description="Value before GST")
    gst_amount: Decimal = Field(..., description="GST on the taxable amount")
    tds_amount: Decimal = Field(..., description="Amount withheld")
    net_payable: Decimal = Field(..., description="taxable + GST - TDS")
    gst_rate: Decimal = Field(..., description="GST rate applied")
    tds_rate: Decimal = Field(..., description="TDS rate applied to the GST amount")

    model_config = {"frozen": True}

    def rounded(self, places: int = 2, rounding: str = "ROUND_HALF_UP") -> "TdsResult":
        taxable = round_money(self.taxable_amount, places, rounding)
        gst_amount = round_money(self.gst_amount, places, rounding)
        tds_amount = round_money(self.tds_amount, places, rounding)
        return self.model_copy(update={
            "taxable_amount": taxable,
            "gst_amount": gst_amount,
            "tds_amount": tds_amount,
            "net_payable": taxable + gst_amount - tds_amount,
        })
