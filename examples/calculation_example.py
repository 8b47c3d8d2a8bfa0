"""
Calculation Examples for the GST Engine
Demonstrates tax calculation, invoices, rate overrides and configuration
"""

import logging
from datetime import date

from gst_engine import (
    ConfigLoader,
    GstConfig,
    GstinValidator,
    InvoiceAggregator,
    RateManager,
    TaxCalculator,
    TaxCalculationError,
)


# =============================================================================
# Example 1: Single Amount
# =============================================================================

def single_amount_example() -> None:
    """Intra-state, inter-state and inclusive calculations"""
    calculator = TaxCalculator()

    intra = calculator.calculate_tax(amount=1000, gst_rate=18)
    print(f"  Intra-state: CGST {intra.cgst}, SGST {intra.sgst}, total {intra.total_amount}")

    inter = calculator.calculate_tax(amount=1000, gst_rate=28, cess_rate=12, is_inter_state=True)
    print(f"  Inter-state: IGST {inter.igst}, cess {inter.cess}, total {inter.total_amount}")

    inclusive = calculator.calculate_tax(amount=11800, gst_rate=18, is_inclusive=True)
    print(f"  Inclusive 11800 @ 18%: taxable {inclusive.taxable_amount}")

    # Exact values are kept until the caller rounds them
    print(f"  Rounded: {calculator.calculate_tax(amount='99.99', gst_rate=18).rounded()}")


# =============================================================================
# Example 2: Reverse GST, Composite Rate and TDS
# =============================================================================

def helpers_example() -> None:
    calculator = TaxCalculator(GstConfig(round_results=True))

    reverse = calculator.calculate_reverse_gst(1180, 18)
    print(f"  Reverse GST on 1180: base {reverse.taxable_amount}, GST {reverse.gst_amount}")

    rate = calculator.calculate_composite_rate([(1000, 18), (500, 12), (500, 5)])
    print(f"  Composite rate: {rate}%")

    tds = calculator.calculate_tds_on_gst(10000, 18)
    print(f"  TDS: {tds.tds_amount}, net payable {tds.net_payable}")


# =============================================================================
# Example 3: Whole Invoice
# =============================================================================

def invoice_example() -> None:
    """Tax an invoice with an HSN-derived rate per line"""
    rates = RateManager()
    aggregator = InvoiceAggregator(config=GstConfig(round_results=True))

    invoice = {
        "invoice_number": "INV-2024-0042",
        "invoice_date": date(2024, 4, 1),
        "place_of_supply": "29",
        "supplier_gstin": "27AAPFU0939F1ZV",
        "supplier_name": "Acme Traders",
        "supplier_state": "27",
        "customer_name": "Globex Retail",
        "customer_state": "29",
        "line_items": [
            {
                "serial_no": 1,
                "description": "Laptop",
                "hsn_sac": "8471",
                "quantity": 5,
                "unit": "NOS",
                "unit_price": "45000",
                "discount_percent": "5",
                "gst_rate": rates.get_rate("8471"),
            },
            {
                "serial_no": 2,
                "description": "Installation",
                "hsn_sac": "998314",
                "quantity": 1,
                "unit": "NOS",
                "unit_price": "2500",
                "gst_rate": rates.get_rate("998314"),
                "is_service": True,
            },
        ],
    }

    result = aggregator.calculate_invoice_tax(invoice)

    for line in result.line_item_calculations:
        print(f"  Line {line.serial_no}: taxable {line.line_total}, IGST {line.breakdown.igst}")
    print(f"  Invoice total: {result.totals.total_invoice_amount}")


# =============================================================================
# Example 4: Tenant Rate Overrides
# =============================================================================

def custom_rates_example() -> None:
    manager = RateManager()
    manager.set_custom_rate("8471", 12)
    print(f"  8471 with override: {manager.get_rate('8471')}%")

    manager.clear_custom_rates()
    print(f"  8471 after clear: {manager.get_rate('8471')}%")


# =============================================================================
# Example 5: Configuration and Errors
# =============================================================================

def config_example() -> None:
    """Load configuration from the environment with overrides"""
    loader = ConfigLoader()

    # Reads GST_* environment variables, then applies the dict on top
    config = loader.load(config={"round_results": True, "default_tds_rate": "1"})
    calculator = TaxCalculator(config)

    try:
        calculator.calculate_tax(amount=-100, gst_rate=18)
    except TaxCalculationError as e:
        print(f"  {e.get_description()}")

    print(f"  GSTIN valid: {GstinValidator.is_valid('27AAPFU0939F1ZV')}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=== GST Engine Examples ===\n")

    print("1. Single Amount:")
    single_amount_example()
    print()

    print("2. Reverse GST, Composite Rate and TDS:")
    helpers_example()
    print()

    print("3. Whole Invoice:")
    invoice_example()
    print()

    print("4. Tenant Rate Overrides:")
    custom_rates_example()
    print()

    print("5. Configuration and Errors:")
    config_example()
