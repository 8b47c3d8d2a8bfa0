"""
GST tax calculator
Pure arithmetic for a single amount: CGST/SGST/IGST split, reverse
extraction, composite rates and TDS on GST
"""

import logging
from decimal import Decimal, localcontext
from typing import Any, Iterable, Mapping, Optional, Union

from gst_engine.config.gst_config import GstConfig
from gst_engine.exceptions import (
    EmptyInputError,
    InvalidAmountError,
    InvalidCessRateError,
    InvalidRateError,
    InvalidTotalError,
    ValidationError,
)
from gst_engine.models.parsing import validate_model
from gst_engine.models.tax import (
    ReverseGstResult,
    Supply,
    TaxBreakdown,
    TaxCalculationInput,
    TdsResult,
)
from gst_engine.utils.money import HUNDRED, percent_of, round_money, to_decimal


# Logger for this module
logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWO_HUNDRED = Decimal("200")

SupplyLike = Union[Supply, Mapping[str, Any], tuple]


class TaxCalculator:
    """
    GST Tax Calculator for Indian tax calculations

    Holds only immutable configuration, so one instance can be shared
    freely between threads. Arithmetic runs at the configured Decimal
    precision with no intermediate rounding; results are rounded only
    when the configuration asks for it.

    Example:
        >>> calculator = TaxCalculator()
        >>> result = calculator.calculate_tax(amount=1000, gst_rate=18)
        >>> result.cgst, result.sgst, result.total_amount
        (Decimal('90'), Decimal('90'), Decimal('1180'))
    """

    def __init__(self, config: Optional[GstConfig] = None) -> None:
        """
        Create a calculator

        Args:
            config: Engine configuration (defaults apply when omitted)
        """
        self.config = config or GstConfig()

    def calculate_tax(
        self,
        calc_input: Optional[Union[TaxCalculationInput, Mapping[str, Any]]] = None,
        **kwargs: Any,
    ) -> TaxBreakdown:
        """
        Calculate the GST breakdown for an amount

        Args:
            calc_input: Calculation input, or a mapping of its fields
            **kwargs: Input fields, when calc_input is not given

        Returns:
            TaxBreakdown with CGST/SGST for intra-state supplies or IGST
            for inter-state supplies, plus cess

        Raises:
            InvalidAmountError: If amount is not positive
            InvalidRateError: If gst_rate is outside the accepted range
            InvalidCessRateError: If cess_rate is negative
        """
        data = self._coerce_input(calc_input, kwargs)

        self._check_positive_amount(data.amount)
        self._check_gst_rate(data.gst_rate)
        self._check_cess_rate(data.cess_rate)

        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision

            if data.is_inclusive:
                # Amount includes GST and cess; extract the taxable value
                taxable = data.amount * HUNDRED / (HUNDRED + data.gst_rate + data.cess_rate)
            else:
                taxable = data.amount

            if data.is_inter_state:
                cgst = sgst = ZERO
                igst = percent_of(taxable, data.gst_rate)
            else:
                cgst = sgst = taxable * data.gst_rate / TWO_HUNDRED
                igst = ZERO

            cess = percent_of(taxable, data.cess_rate)
            total_tax = cgst + sgst + igst + cess

            breakdown = TaxBreakdown(
                taxable_amount=taxable,
                cgst=cgst,
                sgst=sgst,
                igst=igst,
                cess=cess,
                total_tax=total_tax,
                total_amount=taxable + total_tax,
                gst_rate=data.gst_rate,
                cess_rate=data.cess_rate,
                is_inter_state=data.is_inter_state,
                is_inclusive=data.is_inclusive,
                apply_reverse_charge=data.apply_reverse_charge,
            )

        if self.config.enable_audit_log:
            logger.debug(
                "GST calculated: taxable=%s rate=%s cess_rate=%s inter_state=%s "
                "inclusive=%s total_tax=%s",
                taxable, data.gst_rate, data.cess_rate, data.is_inter_state,
                data.is_inclusive, total_tax,
            )

        return self._maybe_round(breakdown)

    def calculate_reverse_gst(self, gross_amount: Any, gst_rate: Any) -> ReverseGstResult:
        """
        Extract base and GST from a GST-inclusive amount

        Args:
            gross_amount: Amount including GST
            gst_rate: GST rate in percent

        Returns:
            ReverseGstResult with taxable_amount and gst_amount

        Raises:
            InvalidAmountError: If gross_amount is not positive
            InvalidRateError: If gst_rate is outside the accepted range
        """
        gross = to_decimal(gross_amount, "gross_amount")
        rate = to_decimal(gst_rate, "gst_rate")

        self._check_positive_amount(gross)
        self._check_gst_rate(rate)

        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            taxable = gross * HUNDRED / (HUNDRED + rate)
            result = ReverseGstResult(taxable_amount=taxable, gst_amount=gross - taxable)

        if self.config.enable_audit_log:
            logger.debug(
                "Reverse GST: gross=%s rate=%s taxable=%s", gross, rate, taxable
            )

        return self._maybe_round(result)

    def calculate_composite_rate(self, supplies: Iterable[SupplyLike]) -> Decimal:
        """
        Volume-weighted GST rate across mixed-rate supplies

        Computes sum(amount x rate) / sum(amount) with a single division,
        so the result does not depend on the order of the supplies.

        Args:
            supplies: Supply models, mappings with amount/gst_rate,
                or (amount, rate) pairs

        Returns:
            Weighted average rate in percent

        Raises:
            EmptyInputError: If no supplies are given
            InvalidAmountError: If a supply amount is negative
            InvalidRateError: If a supply rate is outside the accepted range
            InvalidTotalError: If the amounts do not sum to a positive total
        """
        items = [self._coerce_supply(s) for s in supplies]
        if not items:
            logger.debug("Composite rate rejected: no supplies")
            raise EmptyInputError()

        for item in items:
            self._check_non_negative_amount(item.amount)
            self._check_gst_rate(item.gst_rate)

        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            total_amount = sum((s.amount for s in items), ZERO)
            if total_amount <= ZERO:
                logger.debug("Composite rate rejected: total=%s", total_amount)
                raise InvalidTotalError(total_amount)

            weighted_tax = sum((s.amount * s.gst_rate for s in items), ZERO)
            rate = weighted_tax / total_amount

        if self.config.enable_audit_log:
            logger.debug(
                "Composite rate over %d supplies: total=%s rate=%s",
                len(items), total_amount, rate,
            )

        if self.config.round_results:
            return self._round(rate)
        return rate

    def calculate_tds_on_gst(
        self,
        taxable_amount: Any,
        gst_rate: Any,
        tds_rate: Optional[Any] = None,
    ) -> TdsResult:
        """
        Calculate TDS withheld on the GST portion of a payment

        Args:
            taxable_amount: Value before GST (zero is allowed)
            gst_rate: GST rate in percent
            tds_rate: TDS percentage of the GST amount; the configured
                default (2% unless overridden) when omitted

        Returns:
            TdsResult with gst_amount, tds_amount and net_payable

        Raises:
            InvalidAmountError: If taxable_amount is negative
            InvalidRateError: If gst_rate or tds_rate is out of range
        """
        taxable = to_decimal(taxable_amount, "taxable_amount")
        rate = to_decimal(gst_rate, "gst_rate")
        tds = self.config.default_tds_rate if tds_rate is None else to_decimal(tds_rate, "tds_rate")

        self._check_non_negative_amount(taxable)
        self._check_gst_rate(rate)
        if tds < ZERO or tds > HUNDRED:
            logger.debug("TDS rate rejected: %s", tds)
            raise InvalidRateError(
                tds, ZERO, HUNDRED,
                message=f"TDS rate must be between 0 and 100 (got {tds})",
            )

        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            gst_amount = percent_of(taxable, rate)
            tds_amount = percent_of(gst_amount, tds)
            result = TdsResult(
                taxable_amount=taxable,
                gst_amount=gst_amount,
                tds_amount=tds_amount,
                net_payable=taxable + gst_amount - tds_amount,
                gst_rate=rate,
                tds_rate=tds,
            )

        if self.config.enable_audit_log:
            logger.debug(
                "TDS on GST: taxable=%s gst=%s tds=%s", taxable, gst_amount, tds_amount
            )

        return self._maybe_round(result)

    def _coerce_input(
        self,
        calc_input: Optional[Union[TaxCalculationInput, Mapping[str, Any]]],
        kwargs: Mapping[str, Any],
    ) -> TaxCalculationInput:
        if calc_input is not None and kwargs:
            raise ValidationError(
                "Pass either a calculation input or keyword fields, not both"
            )
        if isinstance(calc_input, TaxCalculationInput):
            return calc_input
        if calc_input is None:
            return validate_model(TaxCalculationInput, kwargs)
        return validate_model(TaxCalculationInput, calc_input)

    def _coerce_supply(self, supply: SupplyLike) -> Supply:
        if isinstance(supply, Supply):
            return supply
        if isinstance(supply, Mapping):
            return validate_model(Supply, supply)
        if isinstance(supply, (tuple, list)) and len(supply) == 2:
            return validate_model(Supply, {"amount": supply[0], "gst_rate": supply[1]})
        raise ValidationError(
            f"Supply must be a Supply, a mapping or an (amount, rate) pair: {supply!r}",
            field="supplies",
        )

    def _check_positive_amount(self, amount: Decimal) -> None:
        if amount <= ZERO:
            logger.debug("Amount rejected: %s", amount)
            raise InvalidAmountError(amount)

    def _check_non_negative_amount(self, amount: Decimal) -> None:
        if amount < ZERO:
            logger.debug("Amount rejected: %s", amount)
            raise InvalidAmountError(amount, "Amount cannot be negative")

    def _check_gst_rate(self, rate: Decimal) -> None:
        if rate < ZERO or rate > self.config.max_gst_rate:
            logger.debug("GST rate rejected: %s", rate)
            raise InvalidRateError(rate, ZERO, self.config.max_gst_rate)

    def _check_cess_rate(self, cess_rate: Decimal) -> None:
        if cess_rate < ZERO:
            logger.debug("Cess rate rejected: %s", cess_rate)
            raise InvalidCessRateError(cess_rate)

    def _round(self, value: Decimal) -> Decimal:
        return round_money(value, self.config.amount_precision, self.config.rounding_mode)

    def _maybe_round(self, result):
        if self.config.round_results:
            return result.rounded(self.config.amount_precision, self.config.rounding_mode)
        return result
