# src/mica_ixbrl/application/schemas/dto/whitepaper.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Application DTOs for the white-paper input record.

Synopsis:
    Strict (Pydantic v2) DTOs describing the JSON record handed over by the
    extraction/editing collaborator, and their conversion into the immutable
    domain ``WhitepaperData``.

Layer:
    application/schemas/dto

Notes:
    - Every field is optional: absence is reported by validation, not by
      parsing. Only the shape (types, unknown keys) is enforced here.
    - ``whitepaper_from_payload`` is the single place where pydantic's
      ``ValidationError`` is translated into ``InvalidWhitepaperError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Final

from pydantic import AliasChoices, Field, ValidationError, field_validator

from mica_ixbrl.application.schemas.dto.base import BaseDTO
from mica_ixbrl.domain.entities.whitepaper import (
    EntityInfo,
    ManagementBodies,
    ManagementBodyMember,
    OfferingInfo,
    OfferorInfo,
    PersonInvolved,
    ProjectInfo,
    RightsInfo,
    RiskInfo,
    SustainabilityInfo,
    TechnologyInfo,
    TokenInfo,
    WhitepaperData,
)
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.domain.exceptions.mica import InvalidWhitepaperError

WITHDRAWAL_GRANTED: Final[str] = (
    "The purchaser has a right of withdrawal within 14 calendar days."
)
WITHDRAWAL_NOT_GRANTED: Final[str] = "No right of withdrawal."


class OfferorDTO(BaseDTO):
    """Part A."""

    legal_name: str | None = None
    lei: str | None = None
    registered_address: str | None = None
    country: str | None = None
    website: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None

    def to_entity(self) -> OfferorInfo:
        return OfferorInfo(**self.model_dump())


class EntityDTO(BaseDTO):
    """Parts B and C."""

    legal_name: str | None = None
    lei: str | None = None
    registered_address: str | None = None
    country: str | None = None

    def to_entity(self) -> EntityInfo:
        return EntityInfo(**self.model_dump())


class ProjectDTO(BaseDTO):
    """Part D."""

    crypto_asset_name: str | None = None
    crypto_asset_symbol: str | None = None
    total_supply: Decimal | None = None
    token_standard: str | None = None
    blockchain_network: str | None = None
    consensus_mechanism: str | None = None
    project_description: str | None = None

    def to_entity(self) -> ProjectInfo:
        return ProjectInfo(**self.model_dump())


class OfferingDTO(BaseDTO):
    """Part E.

    ``withdrawalRights`` may be sent as narrative text or as a boolean flag,
    which is turned into the matching standard sentence.
    """

    is_public_offering: bool | None = None
    public_offering_start_date: str | None = None
    public_offering_end_date: str | None = None
    token_price: Decimal | None = None
    token_price_currency: str | None = None
    max_subscription_goal: Decimal | None = None
    withdrawal_rights: bool | str | None = None
    payment_methods: list[str] = Field(default_factory=list)

    def to_entity(self) -> OfferingInfo:
        withdrawal = self.withdrawal_rights
        if isinstance(withdrawal, bool):
            withdrawal = WITHDRAWAL_GRANTED if withdrawal else WITHDRAWAL_NOT_GRANTED
        return OfferingInfo(
            is_public_offering=self.is_public_offering,
            public_offering_start_date=self.public_offering_start_date,
            public_offering_end_date=self.public_offering_end_date,
            token_price=self.token_price,
            token_price_currency=self.token_price_currency,
            max_subscription_goal=self.max_subscription_goal,
            withdrawal_rights=withdrawal,
            payment_methods=tuple(self.payment_methods),
        )


class TokenDTO(BaseDTO):
    """Part F."""

    classification: str | None = None
    rights_description: str | None = None
    technical_specifications: str | None = None

    def to_entity(self) -> TokenInfo:
        return TokenInfo(**self.model_dump())


class RightsDTO(BaseDTO):
    """Part G."""

    purchase_rights: str | None = None
    ownership_rights: str | None = None
    transfer_restrictions: str | None = None
    dynamic_supply_mechanism: str | None = None

    def to_entity(self) -> RightsInfo:
        return RightsInfo(**self.model_dump())


class TechnologyDTO(BaseDTO):
    """Part H."""

    blockchain_description: str | None = None
    smart_contract_info: str | None = None
    security_audits: list[str] = Field(default_factory=list)

    def to_entity(self) -> TechnologyInfo:
        return TechnologyInfo(
            blockchain_description=self.blockchain_description,
            smart_contract_info=self.smart_contract_info,
            security_audits=tuple(self.security_audits),
        )


class RiskDTO(BaseDTO):
    """Part I."""

    offer_risks: list[str] = Field(default_factory=list)
    issuer_risks: list[str] = Field(default_factory=list)
    market_risks: list[str] = Field(default_factory=list)
    technology_risks: list[str] = Field(default_factory=list)
    regulatory_risks: list[str] = Field(default_factory=list)

    def to_entity(self) -> RiskInfo:
        return RiskInfo(**{name: tuple(items) for name, items in self.model_dump().items()})


class SustainabilityDTO(BaseDTO):
    """Part J."""

    energy_consumption: Decimal | None = None
    consensus_mechanism_type: str | None = None
    renewable_energy_percentage: Decimal | None = None
    ghg_emissions: Decimal | None = None

    def to_entity(self) -> SustainabilityInfo:
        return SustainabilityInfo(**self.model_dump())


class ManagementBodyMemberDTO(BaseDTO):
    """One management-body member."""

    identity: str | None = None
    business_address: str | None = None
    function: str | None = None

    def to_entity(self) -> ManagementBodyMember:
        return ManagementBodyMember(**self.model_dump())


class ManagementBodiesDTO(BaseDTO):
    """Management-body members grouped by entity role."""

    offeror: list[ManagementBodyMemberDTO] = Field(default_factory=list)
    issuer: list[ManagementBodyMemberDTO] = Field(default_factory=list)
    operator: list[ManagementBodyMemberDTO] = Field(default_factory=list)

    def to_entity(self) -> ManagementBodies:
        return ManagementBodies(
            offeror=tuple(m.to_entity() for m in self.offeror),
            issuer=tuple(m.to_entity() for m in self.issuer),
            operator=tuple(m.to_entity() for m in self.operator),
        )


class PersonInvolvedDTO(BaseDTO):
    """A person involved in project implementation."""

    name: str | None = Field(default=None, validation_alias=AliasChoices("identity", "name"))
    business_address: str | None = None
    person_type: str | None = Field(
        default=None, validation_alias=AliasChoices("role", "type", "personType", "person_type")
    )

    def to_entity(self) -> PersonInvolved:
        return PersonInvolved(
            name=self.name,
            business_address=self.business_address,
            person_type=self.person_type,
        )


class WhitepaperDataDTO(BaseDTO):
    """Complete white-paper input record.

    Attributes:
        token_type: ``OTHR``, ``ART`` or ``EMT`` (case-insensitive).
        document_date: ISO date; shape is checked by validation, not here.
        language: ISO 639-1 code.
        part_a .. part_j: Per-part sub-records.
        management_bodies: Accepted as ``managementBodyMembers`` or
            ``managementBodies``.
        persons_involved: Accepted as ``projectPersons`` or ``personsInvolved``.
        raw_fields: Field content keyed by taxonomy field number.
    """

    token_type: TokenType | None = None
    document_date: str | None = None
    language: str | None = None
    part_a: OfferorDTO = Field(default_factory=OfferorDTO)
    part_b: EntityDTO | None = None
    part_c: EntityDTO | None = None
    part_d: ProjectDTO = Field(default_factory=ProjectDTO)
    part_e: OfferingDTO = Field(default_factory=OfferingDTO)
    part_f: TokenDTO = Field(default_factory=TokenDTO)
    part_g: RightsDTO = Field(default_factory=RightsDTO)
    part_h: TechnologyDTO = Field(default_factory=TechnologyDTO)
    part_i: RiskDTO = Field(default_factory=RiskDTO)
    part_j: SustainabilityDTO = Field(default_factory=SustainabilityDTO)
    management_bodies: ManagementBodiesDTO = Field(
        default_factory=ManagementBodiesDTO,
        validation_alias=AliasChoices(
            "managementBodyMembers", "managementBodies", "management_bodies"
        ),
    )
    persons_involved: list[PersonInvolvedDTO] = Field(
        default_factory=list,
        validation_alias=AliasChoices("projectPersons", "personsInvolved", "persons_involved"),
    )
    raw_fields: dict[str, str] = Field(default_factory=dict)

    @field_validator("token_type", mode="before")
    @classmethod
    def _upper_token_type(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    def to_entity(self) -> WhitepaperData:
        """Convert to the immutable domain record."""
        return WhitepaperData(
            token_type=self.token_type,
            document_date=self.document_date,
            language=self.language,
            part_a=self.part_a.to_entity(),
            part_b=self.part_b.to_entity() if self.part_b is not None else None,
            part_c=self.part_c.to_entity() if self.part_c is not None else None,
            part_d=self.part_d.to_entity(),
            part_e=self.part_e.to_entity(),
            part_f=self.part_f.to_entity(),
            part_g=self.part_g.to_entity(),
            part_h=self.part_h.to_entity(),
            part_i=self.part_i.to_entity(),
            part_j=self.part_j.to_entity(),
            management_bodies=self.management_bodies.to_entity(),
            persons_involved=tuple(p.to_entity() for p in self.persons_involved),
            raw_fields=dict(self.raw_fields),
        )


def whitepaper_from_payload(payload: Mapping[str, Any]) -> WhitepaperData:
    """Parse a JSON-like mapping into a ``WhitepaperData`` record.

    Raises:
        InvalidWhitepaperError: If the payload does not fit the DTO shape.
    """
    try:
        dto = WhitepaperDataDTO.model_validate(payload)
    except ValidationError as exc:
        raise InvalidWhitepaperError(
            "White-paper payload is not a valid record.",
            details={
                "errors": [
                    {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                    for err in exc.errors()
                ]
            },
        ) from exc
    return dto.to_entity()


__all__ = [
    "WITHDRAWAL_GRANTED",
    "WITHDRAWAL_NOT_GRANTED",
    "EntityDTO",
    "ManagementBodiesDTO",
    "ManagementBodyMemberDTO",
    "OfferingDTO",
    "OfferorDTO",
    "PersonInvolvedDTO",
    "ProjectDTO",
    "RightsDTO",
    "RiskDTO",
    "SustainabilityDTO",
    "TechnologyDTO",
    "TokenDTO",
    "WhitepaperDataDTO",
    "whitepaper_from_payload",
]
