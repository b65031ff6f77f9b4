from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal

import pytest
from fixtures.leis import OFFEROR_LEI

from mica_ixbrl.domain.entities.whitepaper import (
    ManagementBodies,
    ManagementBodyMember,
    OfferingInfo,
    OfferorInfo,
    PersonInvolved,
    ProjectInfo,
    WhitepaperData,
)
from mica_ixbrl.domain.exceptions.mica import MissingEntityIdentifierError
from mica_ixbrl.domain.services.fact_model_builder import FactModelBuilder
from mica_ixbrl.domain.taxonomy.enumerations import TAXONOMY_BASE


def test_numeric_facts_carry_units_decimals_and_period(whitepaper: WhitepaperData) -> None:
    model = FactModelBuilder().build(whitepaper)

    price = model.facts["mica:IssuePrice"]
    assert (price.value, price.unit_ref, price.decimals) == ("0.25", "unit_EUR", 2)
    assert price.context_ref == "ctx_duration"

    supply = model.facts["mica:TotalNumberOfOfferedOrTradedOtherTokens"]
    assert (supply.value, supply.unit_ref, supply.decimals) == ("1000000", "unit_pure", 0)
    assert supply.context_ref == "ctx_instant"

    goal = model.facts["mica:MaximumSubscriptionGoalsExpressedInCurrency"]
    assert (goal.value, goal.decimals) == ("5000000", 0)

    energy = model.facts["mica:EnergyConsumption"]
    assert (energy.value, energy.unit_ref) == ("1234.5", "unit_kWh")

    assert set(model.units) == {"unit_EUR", "unit_pure", "unit_kWh"}
    assert model.default_currency == "EUR"


def test_enumerations_resolve_to_taxonomy_members(whitepaper: WhitepaperData) -> None:
    facts = FactModelBuilder().build(whitepaper).facts

    country = facts["mica:OfferorsRegisteredCountry"]
    assert country.value == "Germany"
    assert country.taxonomy_uri == f"{TAXONOMY_BASE}#DE"

    offering = facts["mica:PublicOfferingOrAdmissionToTrading"]
    assert offering.display_label == "Public offering"
    assert offering.taxonomy_uri == f"{TAXONOMY_BASE}#OfferToThePublic"

    assert facts["mica:OfficialCurrencyDeterminingIssuePrice"].value == "Euro (EUR)"


def test_text_and_boolean_mappings(whitepaper: WhitepaperData) -> None:
    facts = FactModelBuilder().build(whitepaper).facts

    assert facts["mica:InformationAboutLanguagesUsedInOtherTokenWhitePaper"].value == "English"
    assert facts["mica:PaymentMethodsForCryptoAssetPurchase"].value == "Bank transfer, USDC"
    assert facts["mica:AuditIndicatorForOtherToken"].value == "true"
    assert facts["mica:UseOfDistributedLedgerTechnologyIndicatorForOtherToken"].value == "true"
    assert facts["mica:NameOfOtherToken"].unit_ref is None


def test_raw_fields_fill_gaps_but_never_override_typed_values(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        raw_fields={
            "A.1": "Overridden Name",
            "A.2": "Foundation (e.V.)",
            "A.10": "Within 14 days.",
        }
    )

    facts = FactModelBuilder().build(record).facts

    assert facts["mica:NameOfOtherTokenOfferor"].value == "Example Token Foundation"
    assert facts["mica:OfferorsLegalForm"].value == "Foundation (e.V.)"
    response = facts["mica:OfferorsResponseTimeDays"]
    assert (response.value, response.unit_ref, response.decimals) == ("14", "unit_pure", 0)


def test_lettered_sub_field_falls_back_to_parent_raw_value(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(raw_fields={"A.4": "1 Rue de Rivoli, 75001 Paris, France"})

    facts = FactModelBuilder().build(record).facts

    assert facts["mica:OfferorsHeadOfficeAddress"].value.startswith("1 Rue de Rivoli")
    head_office = facts["mica:OfferorsHeadOfficeCountry"]
    assert head_office.value == "France"
    assert head_office.taxonomy_uri == f"{TAXONOMY_BASE}#FR"


def test_numeric_text_without_a_number_is_kept_as_text(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(raw_fields={"A.10": "Promptly"})

    fact = FactModelBuilder().build(record).facts["mica:OfferorsResponseTimeDays"]

    assert fact.value == "Promptly"
    assert fact.unit_ref is None
    assert fact.decimals is None


def test_monetary_text_uses_the_currency_it_names(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_e=OfferingInfo(is_public_offering=False),
        raw_fields={"E.8": "USD 2.50 per token"},
    )

    model = FactModelBuilder().build(record)

    price = model.facts["mica:IssuePrice"]
    assert (price.value, price.unit_ref) == ("2.50", "unit_USD")
    assert "unit_USD" in model.units
    assert model.default_currency == "EUR"


def test_unknown_country_text_is_kept_as_plain_text(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_a=OfferorInfo(lei=OFFEROR_LEI, country="Atlantis", registered_address="")
    )

    fact = FactModelBuilder().build(record).facts["mica:OfferorsRegisteredCountry"]

    assert fact.value == "Atlantis"
    assert fact.taxonomy_uri is None


def test_dimensional_blocks_use_per_row_contexts(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        management_bodies=ManagementBodies(
            offeror=(
                ManagementBodyMember(
                    identity="Jane Doe", business_address="Berlin", function="CEO"
                ),
                ManagementBodyMember(identity="John Roe", function="CFO"),
            ),
        ),
        persons_involved=(
            PersonInvolved(
                name="Example Audit GmbH", business_address="Munich", person_type="auditor"
            ),
        ),
    )

    model = FactModelBuilder().build(record)

    keys = [block.key for block in model.dimensional_blocks]
    assert keys == ["offeror_management", "persons_involved"]

    management = model.dimensional_blocks[0]
    assert management.section == "A"
    assert [row.context_ref for row in management.rows] == [
        "ctx_mgmt_offeror_0",
        "ctx_mgmt_offeror_1",
    ]
    second_cells = dict(management.rows[1].cells)
    assert second_cells["mica:IdentityOfOfferorsManagementBodyMemberForOtherToken"].value == (
        "John Roe"
    )
    assert second_cells["mica:BusinessAddressOfOfferorsManagementBodyMemberForOtherToken"] is None

    person_cells = dict(model.dimensional_blocks[1].rows[0].cells)
    person_type = person_cells["mica:TypeOfPersonInvolvedInImplementationOfOtherToken"]
    assert person_type is not None
    assert person_type.taxonomy_uri == f"{TAXONOMY_BASE}#Auditor"
    assert person_type.context_ref == "ctx_person_involved_0"


def test_records_flatten_facts_and_dimensional_cells(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        management_bodies=ManagementBodies(
            issuer=(ManagementBodyMember(identity="Jane Doe", function="Director"),),
        )
    )

    model = FactModelBuilder().build(record)
    records = model.records()

    assert len(records) == len(model.facts) + 2
    dimensional = [r for r in records if r.context_ref == "ctx_mgmt_issuer_0"]
    assert {r.name for r in dimensional} == {
        "mica:IdentityOfIssuersManagementBodyMemberForOtherToken",
        "mica:FunctionOfIssuersManagementBodyMemberForOtherToken",
    }


def test_integer_fields_round_half_up(make_whitepaper: Callable[..., WhitepaperData]) -> None:
    record = make_whitepaper(
        part_d=ProjectInfo(crypto_asset_name="Example Token", total_supply=Decimal("1000.5"))
    )

    fact = FactModelBuilder().build(record).facts["mica:TotalNumberOfOfferedOrTradedOtherTokens"]

    assert fact.value == "1001"


def test_missing_document_date_uses_builder_today(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(document_date=None)

    model = FactModelBuilder(today=date(2026, 3, 1)).build(record)

    assert model.contexts["ctx_instant"].period.instant_date == date(2026, 3, 1)
    assert "mica:PublicationDateOfWhitePaper" not in model.facts


def test_missing_offeror_identifier_aborts_the_build(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(part_a=OfferorInfo(legal_name="Anonymous"))

    with pytest.raises(MissingEntityIdentifierError):
        FactModelBuilder().build(record)
