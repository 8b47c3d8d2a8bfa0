"""
Invoice aggregation
Folds per-line results into invoice totals
"""

import logging
from typing import Any, Mapping, Optional, Union

from gst_engine.calculation.line_item import LineItemEngine
from gst_engine.config.gst_config import GstConfig
from gst_engine.models.invoice import GstInvoice, InvoiceTaxResult, InvoiceTotals
from gst_engine.models.parsing import validate_model


logger = logging.getLogger(__name__)


class InvoiceAggregator:
    """
    Calculates tax for a whole invoice

    Each line is taxed on its own and the totals are the plain sum of the
    line results, so invoices mixing rates, cess and intra-/inter-state
    lines add up exactly to what the lines show.
    """

    def __init__(
        self,
        line_engine: Optional[LineItemEngine] = None,
        config: Optional[GstConfig] = None,
    ) -> None:
        self.line_engine = line_engine or LineItemEngine(config=config)

    def calculate_invoice_tax(
        self, invoice: Union[GstInvoice, Mapping[str, Any]]
    ) -> InvoiceTaxResult:
        """
        Calculate GST for an entire invoice

        Args:
            invoice: Invoice, or a mapping validated into one (the schema
                requires at least one line item)

        Returns:
            InvoiceTaxResult with per-line results in invoice order and totals
        """
        if not isinstance(invoice, GstInvoice):
            invoice = validate_model(GstInvoice, invoice)

        line_item_calculations = [
            self.line_engine.calculate_line_item_tax(
                line_item,
                invoice.supplier_state,
                invoice.customer_state,
                invoice.reverse_charge,
            )
            for line_item in invoice.line_items
        ]

        totals = InvoiceTotals.from_breakdowns(
            calc.breakdown for calc in line_item_calculations
        )

        if self.line_engine.config.enable_audit_log:
            logger.debug(
                "Invoice %s: %d lines, taxable=%s tax=%s total=%s",
                invoice.invoice_number,
                len(line_item_calculations),
                totals.total_taxable_amount,
                totals.total_tax,
                totals.total_invoice_amount,
            )

        return InvoiceTaxResult(
            line_item_calculations=line_item_calculations,
            totals=totals,
        )
