"""
Line Item and Invoice Unit Tests
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from gst_engine.calculation import InvoiceAggregator, LineItemEngine, TaxCalculator
from gst_engine.config import GstConfig
from gst_engine.exceptions import GstError, InvalidAmountError, ValidationError
from gst_engine.models import GstInvoice, GstInvoiceLineItem, InvoiceTotals


def make_line(serial_no, quantity, unit_price, gst_rate, **extra):
    return GstInvoiceLineItem(
        serial_no=serial_no,
        description=f"Item {serial_no}",
        quantity=quantity,
        unit="NOS",
        unit_price=unit_price,
        gst_rate=gst_rate,
        **extra,
    )


def make_invoice(supplier_state, customer_state, line_items, **extra):
    return GstInvoice(
        invoice_number="INV-2024-001",
        invoice_date=date(2024, 4, 1),
        place_of_supply=customer_state,
        supplier_name="Acme Traders",
        supplier_state=supplier_state,
        customer_name="Globex Retail",
        customer_state=customer_state,
        line_items=line_items,
        **extra,
    )


@pytest.fixture
def engine() -> LineItemEngine:
    return LineItemEngine()


@pytest.fixture
def aggregator() -> InvoiceAggregator:
    return InvoiceAggregator()


class TestLineItemEngine:
    """Tests for LineItemEngine.calculate_line_item_tax"""

    def test_inter_state_with_discount(self, engine: LineItemEngine):
        """Should tax the discounted line total as IGST across states"""
        line = make_line(1, 5, 45000, 18, hsn_sac="8471", discount_percent=5)

        result = engine.calculate_line_item_tax(line, "27", "29")

        assert result.gross_amount == Decimal("225000")
        assert result.discount_amount == Decimal("11250")
        assert result.line_total == Decimal("213750")
        assert result.breakdown.taxable_amount == Decimal("213750")
        assert result.breakdown.igst == Decimal("38475")
        assert result.breakdown.cgst == 0
        assert result.breakdown.total_amount == Decimal("252225")
        assert result.hsn_sac == "8471"
        assert result.serial_no == 1

    def test_intra_state_with_discount(self, engine: LineItemEngine):
        """Should split tax into CGST and SGST within a state"""
        line = make_line(1, 10, "250.50", 12, discount_percent=10)

        result = engine.calculate_line_item_tax(line, "27", "27")

        assert result.gross_amount == Decimal("2505")
        assert result.line_total == Decimal("2254.5")
        assert result.breakdown.cgst == Decimal("135.27")
        assert result.breakdown.sgst == Decimal("135.27")
        assert result.breakdown.igst == 0
        assert result.breakdown.total_amount == Decimal("2525.04")

    def test_line_total_is_gross_less_discount(self, engine: LineItemEngine):
        line = make_line(1, "3", "19.99", 18, discount_percent="12.5")

        result = engine.calculate_line_item_tax(line, "07", "07")

        assert result.line_total == result.gross_amount - result.discount_amount
        assert result.breakdown.taxable_amount == result.line_total

    def test_state_codes_compared_after_strip(self, engine: LineItemEngine):
        result = engine.calculate_line_item_tax(make_line(1, 1, 100, 18), " 27", "27 ")

        assert result.breakdown.is_inter_state is False

    def test_cess_on_line(self, engine: LineItemEngine):
        line = make_line(1, 1, 1000, 28, cess_rate=12)

        result = engine.calculate_line_item_tax(line, "27", "29")

        assert result.breakdown.igst == Decimal("280")
        assert result.breakdown.cess == Decimal("120")
        assert result.breakdown.total_tax == Decimal("400")

    def test_accepts_mapping(self, engine: LineItemEngine):
        line = {
            "serial_no": 1,
            "description": "Consulting",
            "hsn_sac": "998314",
            "quantity": "8",
            "unit": "HRS",
            "unit_price": "1500",
            "gst_rate": "18",
            "is_service": True,
        }

        result = engine.calculate_line_item_tax(line, "29", "29")

        assert result.is_service is True
        assert result.breakdown.cgst == Decimal("1080")

    def test_invalid_mapping(self, engine: LineItemEngine):
        """Should report a malformed line as the engine ValidationError"""
        line = {
            "serial_no": 1,
            "description": "Widget",
            "quantity": "many",
            "unit": "NOS",
            "unit_price": "10",
            "gst_rate": "18",
        }

        with pytest.raises(ValidationError) as exc_info:
            engine.calculate_line_item_tax(line, "27", "27")

        assert exc_info.value.field == "quantity"

    def test_reverse_charge_flag(self, engine: LineItemEngine):
        result = engine.calculate_line_item_tax(
            make_line(1, 1, 1000, 18), "27", "27", reverse_charge=True
        )

        assert result.reverse_charge is True
        assert result.breakdown.apply_reverse_charge is True
        assert result.breakdown.total_tax == Decimal("180")

    def test_full_discount(self, engine: LineItemEngine):
        """Should reject a line discounted to zero"""
        line = make_line(1, 1, 1000, 18, discount_percent=100)

        with pytest.raises(InvalidAmountError):
            engine.calculate_line_item_tax(line, "27", "27")

    def test_invalid_line_item(self):
        with pytest.raises(PydanticValidationError):
            make_line(1, 0, 1000, 18)
        with pytest.raises(PydanticValidationError):
            make_line(1, 1, 1000, 51)
        with pytest.raises(PydanticValidationError):
            make_line(1, 1, 1000, 18, discount_percent=101)
        with pytest.raises(PydanticValidationError):
            make_line(1, 1, 1000, 18, hsn_sac="84AB")

    def test_shares_calculator(self):
        calculator = TaxCalculator(GstConfig(round_results=True))
        engine = LineItemEngine(calculator=calculator)

        assert engine.config is calculator.config

    def test_rounded_results(self):
        engine = LineItemEngine(config=GstConfig(round_results=True))
        line = make_line(1, 3, "33.33", 18, discount_percent="2.5")

        result = engine.calculate_line_item_tax(line, "27", "27")

        # 99.99 less 2.49975 discount
        assert result.gross_amount == Decimal("99.99")
        assert result.discount_amount == Decimal("2.50")
        assert result.line_total == Decimal("97.49")
        assert result.breakdown.cgst == Decimal("8.77")
        assert result.breakdown.total_amount == Decimal("115.03")


class TestInvoiceAggregator:
    """Tests for InvoiceAggregator.calculate_invoice_tax"""

    @pytest.fixture
    def lines(self):
        return [
            make_line(1, 2, 500, 18, hsn_sac="8471"),
            make_line(2, 1, 1000, 28, hsn_sac="2402", cess_rate=12),
        ]

    def test_intra_state_invoice(self, aggregator: InvoiceAggregator, lines):
        result = aggregator.calculate_invoice_tax(make_invoice("27", "27", lines))
        totals = result.totals

        assert totals.total_taxable_amount == Decimal("2000")
        assert totals.total_cgst == Decimal("230")
        assert totals.total_sgst == Decimal("230")
        assert totals.total_igst == 0
        assert totals.total_cess == Decimal("120")
        assert totals.total_tax == Decimal("580")
        assert totals.total_invoice_amount == Decimal("2580")

    def test_inter_state_invoice(self, aggregator: InvoiceAggregator, lines):
        result = aggregator.calculate_invoice_tax(make_invoice("27", "29", lines))
        totals = result.totals

        assert totals.total_cgst == 0
        assert totals.total_sgst == 0
        assert totals.total_igst == Decimal("460")
        assert totals.total_cess == Decimal("120")
        assert totals.total_invoice_amount == Decimal("2580")

    def test_totals_equal_sum_of_lines(self, aggregator: InvoiceAggregator):
        lines = [
            make_line(1, "7", "13.37", 5),
            make_line(2, "1.5", "999.99", 12, discount_percent="3"),
            make_line(3, "11", "0.99", 28, cess_rate="1"),
        ]

        result = aggregator.calculate_invoice_tax(make_invoice("07", "07", lines))
        calcs = result.line_item_calculations

        assert result.totals.total_taxable_amount == sum(c.breakdown.taxable_amount for c in calcs)
        assert result.totals.total_cgst == sum(c.breakdown.cgst for c in calcs)
        assert result.totals.total_cess == sum(c.breakdown.cess for c in calcs)
        assert result.totals.total_tax == sum(c.breakdown.total_tax for c in calcs)
        assert result.totals.total_invoice_amount == sum(c.breakdown.total_amount for c in calcs)

    def test_preserves_line_order(self, aggregator: InvoiceAggregator):
        lines = [make_line(n, 1, 100 * n, 18) for n in (3, 1, 2)]

        result = aggregator.calculate_invoice_tax(make_invoice("27", "27", lines))

        assert [c.serial_no for c in result.line_item_calculations] == [3, 1, 2]
        assert [c.line_total for c in result.line_item_calculations] == [
            Decimal("300"), Decimal("100"), Decimal("200")
        ]

    def test_reverse_charge_invoice(self, aggregator: InvoiceAggregator, lines):
        invoice = make_invoice("27", "27", lines, reverse_charge=True)

        result = aggregator.calculate_invoice_tax(invoice)

        assert all(c.reverse_charge for c in result.line_item_calculations)
        assert result.totals.total_tax == Decimal("580")

    def test_accepts_mapping(self, aggregator: InvoiceAggregator, lines):
        invoice = make_invoice("27", "29", lines).model_dump()

        result = aggregator.calculate_invoice_tax(invoice)

        assert result.totals.total_igst == Decimal("460")

    def test_invalid_mapping(self, aggregator: InvoiceAggregator, lines):
        """Should report a malformed invoice as a GstError"""
        invoice = make_invoice("27", "27", lines).model_dump()
        invoice["line_items"] = []

        with pytest.raises(GstError) as exc_info:
            aggregator.calculate_invoice_tax(invoice)

        assert exc_info.value.field == "line_items"

    def test_empty_line_items_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_invoice("27", "27", [])

    def test_invalid_state_code_rejected(self, lines):
        with pytest.raises(PydanticValidationError):
            make_invoice("Maharashtra", "27", lines)

    def test_invoice_is_inter_state(self, lines):
        assert make_invoice("27", "29", lines).is_inter_state is True
        assert make_invoice("27", "27", lines).is_inter_state is False

    def test_rounded_totals_match_rounded_lines(self):
        aggregator = InvoiceAggregator(config=GstConfig(round_results=True))
        lines = [make_line(n, 1, "0.05", 18) for n in range(1, 4)]

        result = aggregator.calculate_invoice_tax(make_invoice("27", "27", lines))

        # Each line: 0.0045 CGST rounds to 0.00
        assert result.totals.total_cgst == Decimal("0.00")
        assert result.totals.total_invoice_amount == Decimal("0.15")


class TestInvoiceTotals:
    """Tests for InvoiceTotals.from_breakdowns"""

    def test_mixed_intra_and_inter_state(self):
        calculator = TaxCalculator()
        breakdowns = [
            calculator.calculate_tax(amount=1000, gst_rate=18, is_inter_state=False),
            calculator.calculate_tax(amount=2000, gst_rate=12, is_inter_state=True),
        ]

        totals = InvoiceTotals.from_breakdowns(breakdowns)

        assert totals.total_taxable_amount == Decimal("3000")
        assert totals.total_cgst == Decimal("90")
        assert totals.total_sgst == Decimal("90")
        assert totals.total_igst == Decimal("240")
        assert totals.total_tax == Decimal("420")
        assert totals.total_invoice_amount == Decimal("3420")

    def test_empty(self):
        totals = InvoiceTotals.from_breakdowns([])

        assert totals.total_invoice_amount == 0
        assert totals == InvoiceTotals()
