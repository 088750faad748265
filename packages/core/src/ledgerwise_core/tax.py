"""Progressive income tax estimates by country.

Each country has marginal brackets on annual gross income plus optional flat
levies (social security, health insurance) charged on the whole income.
The tables are simplified and meant for planning, not filing.
"""

from decimal import Decimal
from typing import NamedTuple, Optional

import structlog

from .exceptions import LedgerwiseValidationError
from .models import TaxEstimate
from .numeric import HUNDRED, ZERO, percentage_of, to_decimal

logger = structlog.get_logger()


class TaxBracket(NamedTuple):
    """Marginal bracket: income between ``lower`` and ``upper`` taxed at ``rate`` percent."""

    lower: Decimal
    upper: Optional[Decimal]
    rate: Decimal


class CountryTaxTable(NamedTuple):
    name: str
    brackets: tuple[TaxBracket, ...]
    social_security: Decimal = ZERO
    health_insurance: Decimal = ZERO


def _brackets(*rows: tuple) -> tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(
            Decimal(lower),
            Decimal(upper) if upper is not None else None,
            Decimal(rate),
        )
        for lower, upper, rate in rows
    )


# =============================================================================
# TAX TABLES
# =============================================================================

TAX_TABLES = {
    "slovakia": CountryTaxTable(
        name="Slovakia",
        brackets=_brackets(("0", "3936", "0"), ("3936", "22167", "19"), ("22167", None, "25")),
        social_security=Decimal("13.4"),
        health_insurance=Decimal("14"),
    ),
    "usa": CountryTaxTable(
        name="United States",
        brackets=_brackets(
            ("0", "11000", "10"),
            ("11000", "44725", "12"),
            ("44725", "95375", "22"),
            ("95375", "182050", "24"),
            ("182050", "231250", "32"),
            ("231250", "578125", "35"),
            ("578125", None, "37"),
        ),
    ),
    "uk": CountryTaxTable(
        name="United Kingdom",
        brackets=_brackets(
            ("0", "12570", "0"),
            ("12570", "50270", "20"),
            ("50270", "125140", "40"),
            ("125140", None, "45"),
        ),
    ),
    "germany": CountryTaxTable(
        name="Germany",
        brackets=_brackets(
            ("0", "10908", "0"),
            ("10908", "62810", "14"),
            ("62810", "277826", "42"),
            ("277826", None, "45"),
        ),
        social_security=Decimal("18.6"),
        health_insurance=Decimal("14.6"),
    ),
    "france": CountryTaxTable(
        name="France",
        brackets=_brackets(
            ("0", "10777", "0"),
            ("10777", "27478", "11"),
            ("27478", "78570", "30"),
            ("78570", "168994", "41"),
            ("168994", None, "45"),
        ),
        social_security=Decimal("22"),
    ),
}


def supported_countries() -> list[str]:
    """Country keys accepted by ``estimate_tax``."""
    return sorted(TAX_TABLES)


def income_tax(annual_income: Decimal, brackets: tuple[TaxBracket, ...]) -> Decimal:
    """Marginal tax on income across the brackets."""
    tax = ZERO
    for bracket in brackets:
        if annual_income <= bracket.lower:
            break
        top = annual_income if bracket.upper is None else min(annual_income, bracket.upper)
        tax += (top - bracket.lower) * bracket.rate / HUNDRED
    return tax


def estimate_tax(annual_income, country: str) -> TaxEstimate:
    """Estimate annual tax and net income.

    Args:
        annual_income: Gross annual income
        country: One of ``supported_countries()`` (case-insensitive)

    Returns:
        TaxEstimate with the effective rate in percent (0 for zero income)

    Raises:
        LedgerwiseValidationError: For an unknown country or negative income
    """
    key = country.strip().lower()
    table = TAX_TABLES.get(key)
    if table is None:
        raise LedgerwiseValidationError(
            f"Tax rates for {country} not found",
            field="country",
            value=country,
            constraint=f"Must be one of: {', '.join(supported_countries())}",
        )

    income = to_decimal(annual_income)
    if income < 0:
        raise LedgerwiseValidationError(
            "Annual income must not be negative",
            field="annual_income",
            value=income,
        )

    tax = income_tax(income, table.brackets)
    tax += income * table.social_security / HUNDRED
    tax += income * table.health_insurance / HUNDRED

    logger.debug("tax_estimated", country=key, income=str(income), tax=str(tax))
    return TaxEstimate(
        gross_income=income,
        tax_amount=tax,
        net_income=income - tax,
        effective_rate=percentage_of(tax, income),
        country=table.name,
    )
