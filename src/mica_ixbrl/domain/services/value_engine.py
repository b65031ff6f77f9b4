# src/mica_ixbrl/domain/services/value_engine.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Value assertions.

Purpose:
    Cross-field and format rules (date ordering, positivity, percentage
    bounds, ISO code shapes, URL/email shape, symbol casing, energy
    non-negativity, supported languages) and their evaluation.

Layer:
    domain/services

Notes:
    Each check returns a failure message or ``None``. A check whose inputs
    are absent passes; absence is the existence engine's concern.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Final

from mica_ixbrl.domain.entities.validation import ValidationError, ValueAssertion
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, TokenType, ValidationCategory
from mica_ixbrl.domain.services.lei import normalize_lei
from mica_ixbrl.domain.taxonomy.languages import SUPPORTED_LANGUAGES, is_supported_language

_ALL: Final = frozenset(TokenType)

_COUNTRY_RE: Final = re.compile(r"^[A-Z]{2}$")
_LANGUAGE_RE: Final = re.compile(r"^[a-z]{2}$")
_URL_RE: Final = re.compile(r"^https?://.+")
_EMAIL_RE: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ISO_DATE_RE: Final = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


# --------------------------------------------------------------------------- #
# Checks                                                                      #
# --------------------------------------------------------------------------- #


def _offering_dates_ordered(record: WhitepaperData) -> str | None:
    start = _parse_date(record.part_e.public_offering_start_date)
    end = _parse_date(record.part_e.public_offering_end_date)
    if start and end and end <= start:
        return "Public offering end date must be after start date"
    return None


def _total_supply_positive(record: WhitepaperData) -> str | None:
    supply = record.part_d.total_supply
    if supply is not None and supply <= 0:
        return "Total supply must be a positive number"
    return None


def _token_price_positive(record: WhitepaperData) -> str | None:
    price = record.part_e.token_price
    if price is not None and price <= 0:
        return "Token price must be a positive number"
    return None


def _subscription_goal_positive(record: WhitepaperData) -> str | None:
    goal = record.part_e.max_subscription_goal
    if goal is not None and goal <= 0:
        return "Maximum subscription goal must be a positive number"
    return None


def _renewable_percentage_bounded(record: WhitepaperData) -> str | None:
    pct = record.part_j.renewable_energy_percentage
    if pct is not None and not 0 <= pct <= 100:
        return "Renewable energy percentage must be between 0 and 100"
    return None


def _country_code_shape(record: WhitepaperData) -> str | None:
    country = record.part_a.country
    if country and not _COUNTRY_RE.match(country):
        return "Country must be a 2-letter ISO 3166-1 alpha-2 code (e.g., MT, DE, FR)"
    return None


def _website_shape(record: WhitepaperData) -> str | None:
    website = record.part_a.website
    if website and not _URL_RE.match(website):
        return "Website should be a valid URL starting with http:// or https://"
    return None


def _email_shape(record: WhitepaperData) -> str | None:
    email = record.part_a.contact_email
    if email and not _EMAIL_RE.match(email):
        return "Contact email should be a valid email address"
    return None


def _document_date_shape(record: WhitepaperData) -> str | None:
    raw = record.document_date
    if raw and (not _ISO_DATE_RE.match(raw) or _parse_date(raw) is None):
        return "Document date must be in YYYY-MM-DD format"
    return None


def _language_shape(record: WhitepaperData) -> str | None:
    lang = record.language
    if lang and not _LANGUAGE_RE.match(lang):
        return "Language must be a 2-letter ISO 639-1 code (e.g., en, de, fr)"
    return None


def _offering_details_present(record: WhitepaperData) -> str | None:
    offering = record.part_e
    if offering.is_public_offering is True and not (
        offering.token_price or offering.max_subscription_goal
    ):
        return "Public offering should include token price or subscription goal"
    return None


def _symbol_uppercase(record: WhitepaperData) -> str | None:
    symbol = record.part_d.crypto_asset_symbol
    if symbol and symbol != symbol.upper():
        return "Token symbol should be uppercase (e.g., BTC, ETH)"
    return None


def _energy_non_negative(record: WhitepaperData) -> str | None:
    energy = record.part_j.energy_consumption
    if energy is not None and energy < 0:
        return "Energy consumption cannot be negative"
    return None


def _language_supported(record: WhitepaperData) -> str | None:
    lang = record.language
    if lang and _LANGUAGE_RE.match(lang) and not is_supported_language(lang):
        return (
            f"Language '{lang}' is not a supported EU official language. "
            f"Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return None


def _issuer_differs_from_offeror(record: WhitepaperData) -> str | None:
    issuer = normalize_lei(record.part_b.lei) if record.part_b is not None else ""
    if issuer and issuer == normalize_lei(record.part_a.lei):
        return "If issuer is the same as offeror, issuer section may be omitted"
    return None


# --------------------------------------------------------------------------- #
# Catalog                                                                     #
# --------------------------------------------------------------------------- #

COMMON_VALUE_ASSERTIONS: Final[tuple[ValueAssertion, ...]] = (
    ValueAssertion("VAL-001", "Public offering end date must be after start date", _ALL,
                   Severity.ERROR, _offering_dates_ordered, "part_e.public_offering_end_date",
                   "mica:SubscriptionPeriodEnd"),
    ValueAssertion("VAL-002", "Total supply must be positive", _ALL, Severity.ERROR,
                   _total_supply_positive, "part_d.total_supply",
                   "mica:TotalNumberOfOfferedOrTradedOtherTokens"),
    ValueAssertion("VAL-003", "Token price must be positive if provided", _ALL, Severity.ERROR,
                   _token_price_positive, "part_e.token_price", "mica:IssuePrice"),
    ValueAssertion("VAL-004", "Maximum subscription goal must be positive if provided", _ALL,
                   Severity.ERROR, _subscription_goal_positive, "part_e.max_subscription_goal",
                   "mica:MaximumSubscriptionGoalsExpressedInCurrency"),
    ValueAssertion("VAL-005", "Renewable energy percentage must be between 0 and 100", _ALL,
                   Severity.ERROR, _renewable_percentage_bounded,
                   "part_j.renewable_energy_percentage",
                   "mica:RenewableEnergyConsumptionPercentage"),
    ValueAssertion("VAL-006", "Country code must be 2 letters (ISO 3166-1 alpha-2)", _ALL,
                   Severity.ERROR, _country_code_shape, "part_a.country",
                   "mica:OfferorsRegisteredCountry"),
    ValueAssertion("VAL-007", "Website must be a valid URL", _ALL, Severity.WARNING,
                   _website_shape, "part_a.website", "mica:OtherTokenIssuersWebsite"),
    ValueAssertion("VAL-008", "Email must be a valid format", _ALL, Severity.WARNING,
                   _email_shape, "part_a.contact_email", "mica:OfferorsEmailAddress"),
    ValueAssertion("VAL-009", "Document date must be valid format", _ALL, Severity.ERROR,
                   _document_date_shape, "document_date", "mica:PublicationDateOfWhitePaper"),
    ValueAssertion("VAL-010", "Language must be 2-letter ISO code", _ALL, Severity.ERROR,
                   _language_shape, "language"),
    ValueAssertion("VAL-011", "If public offering is true, offering details should be provided",
                   _ALL, Severity.WARNING, _offering_details_present, "part_e"),
    ValueAssertion("VAL-012", "Token symbol should be uppercase", _ALL, Severity.WARNING,
                   _symbol_uppercase, "part_d.crypto_asset_symbol",
                   "mica:OtherTokenProjectAbbreviation"),
    ValueAssertion("VAL-013", "Energy consumption must be non-negative", _ALL, Severity.ERROR,
                   _energy_non_negative, "part_j.energy_consumption", "mica:EnergyConsumption"),
    ValueAssertion("VAL-014",
                   "Language must be a supported EU official language per MiCA Article 6(7)",
                   _ALL, Severity.WARNING, _language_supported, "language"),
)

ART_VALUE_ASSERTIONS: Final[tuple[ValueAssertion, ...]] = (
    ValueAssertion("VAL-ART-001", "Issuer LEI must be different from offeror if issuer is "
                   "specified", frozenset({TokenType.ART}), Severity.WARNING,
                   _issuer_differs_from_offeror, "part_b.lei",
                   "mica:IssuersLegalEntityIdentifier"),
)

EMT_VALUE_ASSERTIONS: Final[tuple[ValueAssertion, ...]] = (
    ValueAssertion("VAL-EMT-001", "Issuer LEI must be different from offeror if issuer is "
                   "specified", frozenset({TokenType.EMT}), Severity.WARNING,
                   _issuer_differs_from_offeror, "part_b.lei",
                   "mica:IssuersLegalEntityIdentifier"),
)


def get_value_assertions(
    token_type: TokenType,
    *,
    skip_rules: Iterable[str] = (),
) -> tuple[ValueAssertion, ...]:
    """Return the value assertions applicable to ``token_type``, minus skipped ids."""
    skipped = frozenset(skip_rules)
    specific: tuple[ValueAssertion, ...] = {
        TokenType.OTHR: (),
        TokenType.ART: ART_VALUE_ASSERTIONS,
        TokenType.EMT: EMT_VALUE_ASSERTIONS,
    }[token_type]
    return tuple(
        a
        for a in (*COMMON_VALUE_ASSERTIONS, *specific)
        if token_type in a.token_types and a.rule_id not in skipped
    )


def evaluate_values(
    record: WhitepaperData, assertions: Sequence[ValueAssertion]
) -> tuple[ValidationError, ...]:
    """Run every check and return one finding per failure."""
    findings: list[ValidationError] = []
    for assertion in assertions:
        message = assertion.check(record)
        if message is None:
            continue
        findings.append(
            ValidationError(
                rule_id=assertion.rule_id,
                severity=assertion.severity,
                message=message,
                category=ValidationCategory.VALUE,
                element=assertion.element,
                field_path=assertion.field_path,
            )
        )
    return tuple(findings)


__all__ = [
    "ART_VALUE_ASSERTIONS",
    "COMMON_VALUE_ASSERTIONS",
    "EMT_VALUE_ASSERTIONS",
    "evaluate_values",
    "get_value_assertions",
]
