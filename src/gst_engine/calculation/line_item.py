"""
Invoice line item tax
Turns one line (quantity, price, discount) into its taxable value and
tax breakdown
"""

import logging
from decimal import localcontext
from typing import Any, Mapping, Optional, Union

from gst_engine.calculation.calculator import TaxCalculator
from gst_engine.config.gst_config import GstConfig
from gst_engine.models.invoice import GstInvoiceLineItem, LineItemTaxResult
from gst_engine.models.parsing import validate_model
from gst_engine.models.tax import TaxCalculationInput
from gst_engine.utils.money import percent_of
from gst_engine.validation.state import is_intra_state


logger = logging.getLogger(__name__)


class LineItemEngine:
    """
    Computes the taxable value and tax of a single invoice line

    Line prices are always tax-exclusive. The supply is inter-state
    when supplier and customer state codes differ.
    """

    def __init__(
        self,
        calculator: Optional[TaxCalculator] = None,
        config: Optional[GstConfig] = None,
    ) -> None:
        self.calculator = calculator or TaxCalculator(config)

    @property
    def config(self) -> GstConfig:
        return self.calculator.config

    def calculate_line_item_tax(
        self,
        line_item: Union[GstInvoiceLineItem, Mapping[str, Any]],
        supplier_state: str,
        customer_state: str,
        reverse_charge: bool = False,
    ) -> LineItemTaxResult:
        """
        Calculate GST for an invoice line item

        Args:
            line_item: Line item, or a mapping validated into one
            supplier_state: Supplier 2-digit state code
            customer_state: Customer 2-digit state code
            reverse_charge: Invoice-level reverse charge flag, carried through

        Returns:
            LineItemTaxResult with the line total and its breakdown

        Raises:
            InvalidAmountError: If the discounted line total is zero
        """
        if not isinstance(line_item, GstInvoiceLineItem):
            line_item = validate_model(GstInvoiceLineItem, line_item)

        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            gross_amount = line_item.quantity * line_item.unit_price
            discount_amount = percent_of(gross_amount, line_item.discount_percent)
            line_total = gross_amount - discount_amount

        is_inter_state = not is_intra_state(supplier_state, customer_state)

        breakdown = self.calculator.calculate_tax(TaxCalculationInput(
            amount=line_total,
            gst_rate=line_item.gst_rate,
            is_inclusive=False,
            is_inter_state=is_inter_state,
            cess_rate=line_item.cess_rate,
            apply_reverse_charge=reverse_charge,
        ))

        result = LineItemTaxResult(
            serial_no=line_item.serial_no,
            hsn_sac=line_item.hsn_sac,
            gross_amount=gross_amount,
            discount_amount=discount_amount,
            line_total=line_total,
            is_service=line_item.is_service,
            reverse_charge=reverse_charge,
            breakdown=breakdown,
        )

        if self.config.round_results:
            return result.rounded(self.config.amount_precision, self.config.rounding_mode)
        return result
