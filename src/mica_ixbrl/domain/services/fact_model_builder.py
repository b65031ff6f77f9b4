# src/mica_ixbrl/domain/services/fact_model_builder.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Fact model builder (domain kernel).

Purpose:
    Map a white-paper record onto the MiCA taxonomy: contexts, units, one
    fact value per non-dimensional element and one row per repeated
    sub-record (management-body members, persons involved).

Layer:
    domain/services

Notes:
    - Two-phase build:
        * Phase 1 applies typed mappings from the record's sub-records.
        * Phase 2 falls back to the raw-field bag for every declared field
          that phase 1 left unset (exact field number first, then the
          parent number for lettered sub-fields). Phase 2 never overwrites.
    - Numeric fields fed from free text go through best-effort extraction;
      when nothing numeric survives, the original text is kept and the fact
      is later tagged as non-numeric.
    - Enumeration values are resolved to taxonomy URIs; country-like
      enumerations additionally try to read a member-state code out of
      address text. Unresolvable values stay plain text.
    - Pure domain logic: no logging, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Final

from mica_ixbrl.domain.entities.ixbrl_document import (
    DimensionalBlock,
    DimensionalRow,
    FactModel,
    FactValue,
    XBRLUnit,
)
from mica_ixbrl.domain.entities.taxonomy import FieldDefinition
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import ManagementBodyRole, PeriodType, XBRLDataType
from mica_ixbrl.domain.services.context_builder import (
    DURATION_CONTEXT_ID,
    ENERGY_UNIT_ID,
    INSTANT_CONTEXT_ID,
    PURE_UNIT_ID,
    ContextSet,
    build_contexts,
    currency_unit_id,
    resolve_unit,
)
from mica_ixbrl.domain.services.value_extraction import (
    detect_currency,
    extract_country_code,
    extract_numeric_value,
    is_value_numeric,
)
from mica_ixbrl.domain.taxonomy.enumerations import is_country_enumeration, resolve_enumeration
from mica_ixbrl.domain.taxonomy.field_catalog import OTHR_FIELD_DEFINITIONS
from mica_ixbrl.domain.taxonomy.languages import language_name

DEFAULT_CURRENCY: Final[str] = "EUR"

_BOOLEAN_TRUE: Final = frozenset({"true", "yes", "y", "1"})
_BOOLEAN_FALSE: Final = frozenset({"false", "no", "n", "0"})

_UNIT_OVERRIDES: Final[Mapping[str, str]] = {"mica:EnergyConsumption": ENERGY_UNIT_ID}
_DECIMALS_OVERRIDES: Final[Mapping[str, int]] = {
    "mica:MaximumSubscriptionGoalsExpressedInCurrency": 0,
}

_ADDRESS_PREFIXES: Final[tuple[tuple[str, str], ...]] = (
    ("Offerors", "part_a.registered_address"),
    ("Issuers", "part_b.registered_address"),
    ("Operators", "part_c.registered_address"),
)


@dataclass(frozen=True, slots=True)
class _BlockSpec:
    """Static description of one repeating dimensional block."""

    key: str
    section: str
    title: str
    field_numbers: tuple[str, str, str]


_MANAGEMENT_BLOCKS: Final[Mapping[ManagementBodyRole, _BlockSpec]] = {
    ManagementBodyRole.OFFEROR: _BlockSpec(
        "offeror_management", "A", "Offeror Management Body Members", ("A.12", "A.12a", "A.12b")
    ),
    ManagementBodyRole.ISSUER: _BlockSpec(
        "issuer_management", "B", "Issuer Management Body Members", ("B.10", "B.10a", "B.10b")
    ),
    ManagementBodyRole.OPERATOR: _BlockSpec(
        "operator_management",
        "C",
        "Operator Management Body Members",
        ("C.11", "C.11a", "C.11b"),
    ),
}
_PERSONS_BLOCK: Final = _BlockSpec(
    "persons_involved", "C", "Persons Involved in Implementation", ("C.16", "C.16a", "C.16b")
)


def _format_decimal(value: Decimal, *, integer: bool) -> str:
    """Render a Decimal lexically; integers are rounded half-up."""
    if integer:
        return str(int(value.to_integral_value(rounding=ROUND_HALF_UP)))
    return format(value, "f")


def _normalize_boolean(text: str) -> str:
    """Map yes/no style answers to ``true``/``false``; leave narrative untouched."""
    lowered = text.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return "true"
    if lowered in _BOOLEAN_FALSE:
        return "false"
    return text


def _joined(entries: Sequence[str], separator: str) -> str | None:
    """Join non-blank entries, or return None when there are none."""
    kept = [e.strip() for e in entries if e and e.strip()]
    return separator.join(kept) if kept else None


class FactModelBuilder:
    """Build the fact model for one white-paper record.

    Args:
        fields: Field catalog to populate. Defaults to the OTHR table.
        today: Fallback date when a record carries no usable document date.
    """

    def __init__(
        self,
        fields: Sequence[FieldDefinition] = OTHR_FIELD_DEFINITIONS,
        *,
        today: date | None = None,
    ) -> None:
        self._fields = tuple(fields)
        self._by_element = {f.element: f for f in self._fields}
        self._by_number = {f.number: f for f in self._fields}
        self._today = today

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    def build(self, record: WhitepaperData) -> FactModel:
        """Build contexts, units, facts and dimensional blocks for ``record``.

        Raises:
            MissingEntityIdentifierError: If the primary LEI is missing or
                unusable. No partial model is returned.
        """
        contexts = build_contexts(record, today=self._today)
        currency = self.default_currency(record)

        facts = self._apply_typed_mappings(record, currency=currency)
        self._apply_raw_fields(record, facts, currency=currency)
        blocks = self._build_dimensional_blocks(record, contexts, currency=currency)

        return FactModel(
            contexts=contexts.contexts,
            units=self._collect_units(facts, blocks),
            facts=facts,
            dimensional_blocks=blocks,
            default_currency=currency,
        )

    @staticmethod
    def default_currency(record: WhitepaperData) -> str:
        """Return the currency used for monetary facts without their own."""
        currency = (record.part_e.token_price_currency or "").strip().upper()
        return currency if len(currency) == 3 and currency.isalpha() else DEFAULT_CURRENCY

    # ------------------------------------------------------------------ #
    # Phase 1: typed mappings                                            #
    # ------------------------------------------------------------------ #

    def _apply_typed_mappings(
        self, record: WhitepaperData, *, currency: str
    ) -> dict[str, FactValue]:
        """Apply every typed mapping; later mappings for one element win."""
        facts: dict[str, FactValue] = {}
        for element, value, options in self._typed_values(record):
            definition = self._by_element.get(element)
            if definition is None or definition.is_dimensional:
                continue
            fact = self._make_fact(
                definition,
                value,
                context_ref=self._context_for(definition),
                currency=currency,
                **options,
            )
            if fact is not None:
                facts[element] = fact
        return facts

    def _typed_values(  # noqa: C901
        self, record: WhitepaperData
    ) -> Iterator[tuple[str, Any, dict[str, Any]]]:
        """Yield (element, value, options) for every typed mapping."""
        a = record.part_a
        yield "mica:NameOfOtherTokenOfferor", a.legal_name, {}
        yield "mica:OfferorsLegalEntityIdentifier", a.lei, {}
        yield "mica:OfferorsRegisteredAddress", a.registered_address, {}
        yield "mica:OfferorsRegisteredCountry", a.country, {
            "address_hint": a.registered_address
        }
        yield "mica:OfferorsEmailAddress", a.contact_email, {}
        yield "mica:OfferorsContactTelephoneNumber", a.contact_phone, {}
        yield "mica:OtherTokenIssuersWebsite", a.website, {}

        if record.part_b is not None:
            b = record.part_b
            yield "mica:IssuerDifferentFromOfferrorOrPersonSeekingAdmissionToTrading", True, {}
            yield "mica:NameOfOtherTokenIssuer", b.legal_name, {}
            yield "mica:IssuersLegalEntityIdentifier", b.lei, {}
            yield "mica:IssuersRegisteredAddress", b.registered_address, {}
            yield "mica:IssuersRegisteredCountry", b.country, {
                "address_hint": b.registered_address
            }

        if record.part_c is not None:
            c = record.part_c
            yield "mica:NameOfOtherTokenOperator", c.legal_name, {}
            yield "mica:OperatorsLegalEntityIdentifier", c.lei, {}
            yield "mica:OperatorsRegisteredAddress", c.registered_address, {}
            yield "mica:OperatorsRegisteredCountry", c.country, {
                "address_hint": c.registered_address
            }

        d = record.part_d
        yield "mica:NameOfOtherTokenProject", d.crypto_asset_name, {}
        yield "mica:NameOfOtherToken", d.crypto_asset_name, {}
        yield "mica:OtherTokenProjectAbbreviation", d.crypto_asset_symbol, {}
        yield "mica:DescriptionOfOtherTokenProjectExplanatory", d.project_description, {}

        e = record.part_e
        if e.is_public_offering is not None:
            key = "publicOffering" if e.is_public_offering else "admissionToTrading"
            yield "mica:PublicOfferingOrAdmissionToTrading", key, {}
        yield "mica:SubscriptionPeriodBeginning", e.public_offering_start_date, {}
        yield "mica:SubscriptionPeriodEnd", e.public_offering_end_date, {}
        yield "mica:IssuePrice", e.token_price, {}
        if e.token_price is not None or e.token_price_currency:
            yield "mica:OfficialCurrencyDeterminingIssuePrice", (
                e.token_price_currency or self.default_currency(record)
            ), {}
        yield "mica:MaximumSubscriptionGoalsExpressedInCurrency", e.max_subscription_goal, {}
        yield "mica:TotalNumberOfOfferedOrTradedOtherTokens", d.total_supply, {}
        yield "mica:PaymentMethodsForCryptoAssetPurchase", _joined(e.payment_methods, ", "), {}
        yield "mica:RighOfWithdrawalExplanatory", e.withdrawal_rights, {}

        f = record.part_f
        yield "mica:OtherTokenType", d.token_standard, {}
        yield "mica:DescriptionOfOtherTokenCharacteristicsExplanatory", f.classification, {}
        yield "mica:OtherTokenCharacteristicsExplanatory", f.rights_description, {}
        yield "mica:PublicationDateOfWhitePaper", record.document_date, {}
        if record.language:
            yield "mica:InformationAboutLanguagesUsedInOtherTokenWhitePaper", language_name(
                record.language.strip().lower()
            ), {}

        g = record.part_g
        yield "mica:InformationAboutPurchaserRightsAndObligationsExplanatory", g.purchase_rights, {}
        yield "mica:ExerciseOfRightsAndObligationsExplanatory", g.ownership_rights, {}
        yield "mica:OtherTokensTransferRestrictionsExplanatory", g.transfer_restrictions, {}
        if g.dynamic_supply_mechanism:
            yield "mica:SupplyAdjustmentProtocolsIndicator", True, {}
            yield "mica:SupplyAdjustmentMechanismsExplanatory", g.dynamic_supply_mechanism, {}

        h = record.part_h
        yield (
            "mica:DistributedLedgerTechnologyForOtherTokenExplanatory",
            h.blockchain_description,
            {},
        )
        yield (
            "mica:ProtocolsAndTechnicalStandardsForOtherTokenExplanatory",
            h.smart_contract_info,
            {},
        )
        yield "mica:TechnologyUsedForOtherTokenExplanatory", f.technical_specifications, {}
        yield "mica:ConsensusMechanismForOtherTokenExplanatory", d.consensus_mechanism, {}
        if h.blockchain_description or d.blockchain_network:
            yield "mica:UseOfDistributedLedgerTechnologyIndicatorForOtherToken", True, {}
        yield "mica:NameOfDistributedLedgerForOtherToken", d.blockchain_network, {}
        audits = _joined(h.security_audits, "; ")
        if audits:
            yield "mica:AuditIndicatorForOtherToken", True, {}
            yield "mica:AuditOutcomeForOtherTokenExplanatory", audits, {}

        i = record.part_i
        risks = (
            ("mica:DescriptionOfOfferrelatedRisksForOtherTokenExplanatory", i.offer_risks),
            ("mica:DescriptionOfIssuerrelatedRisksForOtherTokenExplanatory", i.issuer_risks),
            ("mica:OtherTokensrelatedRisksExplanatory", i.market_risks),
            (
                "mica:DescriptionOfTechnologyrelatedRisksForOtherTokenExplanatory",
                i.technology_risks,
            ),
            ("mica:ProjectImplementationrelatedRisksExplanatory", i.regulatory_risks),
        )
        for element, entries in risks:
            yield element, _joined(entries, "\n\n"), {}

        j = record.part_j
        yield "mica:ConsensusMechanismSustainabilityExplanatory", j.consensus_mechanism_type, {}
        yield "mica:EnergyConsumption", j.energy_consumption, {}
        yield "mica:RenewableEnergyConsumptionPercentage", j.renewable_energy_percentage, {}
        yield "mica:ScopeOneDLTGHGEmissionsControlled", j.ghg_emissions, {}

    # ------------------------------------------------------------------ #
    # Phase 2: raw-field fallback                                        #
    # ------------------------------------------------------------------ #

    def _apply_raw_fields(
        self, record: WhitepaperData, facts: dict[str, FactValue], *, currency: str
    ) -> None:
        """Fill declared fields left unset by phase 1 from the raw-field bag."""
        for definition in self._fields:
            if definition.is_dimensional or definition.element in facts:
                continue
            raw = self._raw_value(record.raw_fields, definition)
            if raw is None:
                continue
            fact = self._make_fact(
                definition,
                raw,
                context_ref=self._context_for(definition),
                currency=currency,
                address_hint=self._address_hint(record, definition),
            )
            if fact is not None:
                facts[definition.element] = fact

    @staticmethod
    def _raw_value(raw_fields: Mapping[str, str], definition: FieldDefinition) -> str | None:
        """Return raw content for a field, trying its parent number second."""
        for number in (definition.number, definition.parent_number):
            if number is None:
                continue
            value = raw_fields.get(number)
            if value is not None and str(value).strip():
                return str(value)
        return None

    @staticmethod
    def _address_hint(record: WhitepaperData, definition: FieldDefinition) -> str | None:
        """Return the typed address text matching a country element's entity."""
        local = definition.element.split(":", 1)[-1]
        for prefix, path in _ADDRESS_PREFIXES:
            if local.startswith(prefix):
                hint = record.resolve_path(path)
                return hint if isinstance(hint, str) else None
        return None

    # ------------------------------------------------------------------ #
    # Dimensional sub-records                                            #
    # ------------------------------------------------------------------ #

    def _build_dimensional_blocks(
        self, record: WhitepaperData, contexts: ContextSet, *, currency: str
    ) -> tuple[DimensionalBlock, ...]:
        """Build one block per non-empty repeated sub-record kind."""
        bodies = record.management_bodies
        members_by_role = {
            ManagementBodyRole.OFFEROR: bodies.offeror,
            ManagementBodyRole.ISSUER: bodies.issuer,
            ManagementBodyRole.OPERATOR: bodies.operator,
        }

        blocks: list[DimensionalBlock] = []
        for role, members in members_by_role.items():
            if not members:
                continue
            spec = _MANAGEMENT_BLOCKS[role]
            rows = tuple(
                self._dimensional_row(
                    spec,
                    index=index,
                    context_ref=contexts.management[role][index],
                    values=(member.identity, member.business_address, member.function),
                    currency=currency,
                )
                for index, member in enumerate(members)
            )
            blocks.append(self._block(spec, rows))

        if record.persons_involved:
            rows = tuple(
                self._dimensional_row(
                    _PERSONS_BLOCK,
                    index=index,
                    context_ref=contexts.persons[index],
                    values=(person.name, person.business_address, person.person_type),
                    currency=currency,
                )
                for index, person in enumerate(record.persons_involved)
            )
            blocks.append(self._block(_PERSONS_BLOCK, rows))

        return tuple(blocks)

    def _dimensional_row(
        self,
        spec: _BlockSpec,
        *,
        index: int,
        context_ref: str,
        values: tuple[str | None, str | None, str | None],
        currency: str,
    ) -> DimensionalRow:
        """Build one row whose cells all report against ``context_ref``."""
        cells: list[tuple[str, FactValue | None]] = []
        for number, value in zip(spec.field_numbers, values, strict=True):
            definition = self._by_number[number]
            cells.append(
                (
                    definition.element,
                    self._make_fact(definition, value, context_ref=context_ref, currency=currency),
                )
            )
        return DimensionalRow(index=index, context_ref=context_ref, cells=tuple(cells))

    @staticmethod
    def _block(spec: _BlockSpec, rows: tuple[DimensionalRow, ...]) -> DimensionalBlock:
        """Wrap rows into a block carrying the spec's metadata."""
        return DimensionalBlock(
            key=spec.key,
            section=spec.section,
            title=spec.title,
            field_numbers=spec.field_numbers,
            rows=rows,
        )

    # ------------------------------------------------------------------ #
    # Fact construction                                                  #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _context_for(definition: FieldDefinition) -> str:
        """Return the primary context id matching a field's period type."""
        if definition.period_type is PeriodType.INSTANT:
            return INSTANT_CONTEXT_ID
        return DURATION_CONTEXT_ID

    def _make_fact(
        self,
        definition: FieldDefinition,
        value: Any,
        *,
        context_ref: str,
        currency: str,
        address_hint: str | None = None,
    ) -> FactValue | None:
        """Convert a typed or raw value into a fact value for ``definition``.

        Returns:
            The fact value, or None when there is nothing to report.
        """
        if value is None:
            return None

        data_type = definition.data_type
        if isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, Decimal):
            text = _format_decimal(value, integer=data_type is XBRLDataType.INTEGER)
        else:
            text = str(value).strip()

        if data_type is XBRLDataType.ENUMERATION:
            return self._enumeration_fact(definition, text, context_ref, address_hint)
        if not text:
            return None
        if data_type.is_numeric:
            return self._numeric_fact(
                definition,
                text,
                context_ref=context_ref,
                currency=currency,
                from_text=not isinstance(value, Decimal),
            )
        if data_type is XBRLDataType.BOOLEAN:
            text = _normalize_boolean(text)
        return FactValue(value=text, context_ref=context_ref)

    @staticmethod
    def _numeric_fact(
        definition: FieldDefinition,
        text: str,
        *,
        context_ref: str,
        currency: str,
        from_text: bool,
    ) -> FactValue:
        """Build a numeric fact, or a plain-text one when no number survives."""
        data_type = definition.data_type
        lexical = text
        if from_text:
            lexical = extract_numeric_value(text) or text
            if data_type is XBRLDataType.MONETARY:
                currency = detect_currency(text) or currency

        if not is_value_numeric(lexical):
            return FactValue(value=lexical, context_ref=context_ref)

        unit_ref = _UNIT_OVERRIDES.get(definition.element)
        if unit_ref is None:
            unit_ref = (
                currency_unit_id(currency)
                if data_type is XBRLDataType.MONETARY
                else PURE_UNIT_ID
            )
        decimals = _DECIMALS_OVERRIDES.get(
            definition.element, 0 if data_type is XBRLDataType.INTEGER else 2
        )
        return FactValue(
            value=lexical,
            context_ref=context_ref,
            unit_ref=unit_ref,
            decimals=decimals,
        )

    @staticmethod
    def _enumeration_fact(
        definition: FieldDefinition,
        text: str,
        context_ref: str,
        address_hint: str | None,
    ) -> FactValue | None:
        """Resolve an enumeration value to its taxonomy member, if possible."""
        element = definition.element
        option = resolve_enumeration(element, text) if text else None
        if option is None and is_country_enumeration(element):
            code = extract_country_code(text) or extract_country_code(address_hint)
            option = resolve_enumeration(element, code) if code else None
        if option is not None:
            return FactValue(
                value=option.label,
                context_ref=context_ref,
                taxonomy_uri=option.uri,
                display_label=option.label,
            )
        if not text:
            return None
        return FactValue(value=text, context_ref=context_ref)

    # ------------------------------------------------------------------ #
    # Units                                                              #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _collect_units(
        facts: Mapping[str, FactValue], blocks: Sequence[DimensionalBlock]
    ) -> dict[str, XBRLUnit]:
        """Return the units referenced by at least one fact."""
        unit_ids: list[str] = [fv.unit_ref for fv in facts.values() if fv.unit_ref]
        for block in blocks:
            for row in block.rows:
                unit_ids.extend(fv.unit_ref for _, fv in row.cells if fv and fv.unit_ref)
        return {uid: resolve_unit(uid) for uid in dict.fromkeys(unit_ids)}


__all__ = ["DEFAULT_CURRENCY", "FactModelBuilder"]
