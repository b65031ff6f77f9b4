# src/mica_ixbrl/domain/entities/whitepaper.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""White-paper input record.

Purpose:
    Define the immutable record that the fact model builder and the
    validation engines consume. The record is produced upstream (document
    extraction, editing UI) and is never mutated here.

Layer:
    domain/entities

Notes:
    - Every field is optional except the container itself: absence is
      reported by the existence assertions instead of failing construction.
    - ``raw_fields`` carries content keyed by taxonomy field number (for
      example ``"A.2"`` or ``"E.10"``) that has no typed home.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from mica_ixbrl.domain.enums.mica import TokenType


@dataclass(frozen=True, slots=True)
class OfferorInfo:
    """Part A: offeror or person seeking admission to trading."""

    legal_name: str | None = None
    lei: str | None = None
    registered_address: str | None = None
    country: str | None = None
    website: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None


@dataclass(frozen=True, slots=True)
class EntityInfo:
    """Parts B and C: issuer or trading-platform operator."""

    legal_name: str | None = None
    lei: str | None = None
    registered_address: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    """Part D: crypto-asset project."""

    crypto_asset_name: str | None = None
    crypto_asset_symbol: str | None = None
    total_supply: Decimal | None = None
    token_standard: str | None = None
    blockchain_network: str | None = None
    consensus_mechanism: str | None = None
    project_description: str | None = None


@dataclass(frozen=True, slots=True)
class OfferingInfo:
    """Part E: offer to the public or admission to trading."""

    is_public_offering: bool | None = None
    public_offering_start_date: str | None = None
    public_offering_end_date: str | None = None
    token_price: Decimal | None = None
    token_price_currency: str | None = None
    max_subscription_goal: Decimal | None = None
    withdrawal_rights: str | None = None
    payment_methods: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """Part F: crypto-asset characteristics."""

    classification: str | None = None
    rights_description: str | None = None
    technical_specifications: str | None = None


@dataclass(frozen=True, slots=True)
class RightsInfo:
    """Part G: rights and obligations attached to the crypto-asset."""

    purchase_rights: str | None = None
    ownership_rights: str | None = None
    transfer_restrictions: str | None = None
    dynamic_supply_mechanism: str | None = None


@dataclass(frozen=True, slots=True)
class TechnologyInfo:
    """Part H: underlying technology."""

    blockchain_description: str | None = None
    smart_contract_info: str | None = None
    security_audits: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RiskInfo:
    """Part I: risk narratives, one tuple of entries per category."""

    offer_risks: tuple[str, ...] = ()
    issuer_risks: tuple[str, ...] = ()
    market_risks: tuple[str, ...] = ()
    technology_risks: tuple[str, ...] = ()
    regulatory_risks: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SustainabilityInfo:
    """Part J and Annex indicators on climate and environmental impact."""

    energy_consumption: Decimal | None = None
    consensus_mechanism_type: str | None = None
    renewable_energy_percentage: Decimal | None = None
    ghg_emissions: Decimal | None = None


@dataclass(frozen=True, slots=True)
class ManagementBodyMember:
    """One member of an entity's management body."""

    identity: str | None = None
    business_address: str | None = None
    function: str | None = None


@dataclass(frozen=True, slots=True)
class ManagementBodies:
    """Management-body members grouped by entity role."""

    offeror: tuple[ManagementBodyMember, ...] = ()
    issuer: tuple[ManagementBodyMember, ...] = ()
    operator: tuple[ManagementBodyMember, ...] = ()


@dataclass(frozen=True, slots=True)
class PersonInvolved:
    """A person involved in implementing the crypto-asset project."""

    name: str | None = None
    business_address: str | None = None
    person_type: str | None = None


@dataclass(frozen=True, slots=True)
class WhitepaperData:
    """Immutable MiCA white-paper record.

    Attributes:
        token_type:
            White-paper category; drives which assertions apply.
        document_date:
            ISO ``YYYY-MM-DD`` date of the document, anchoring all periods.
        language:
            ISO 639-1 code of the document language.
        part_a .. part_j:
            Typed sub-records per white-paper part. ``part_b`` and ``part_c``
            are only present when the issuer or operator differs from the
            offeror.
        management_bodies:
            Repeated management-body members per entity role.
        persons_involved:
            Repeated persons involved in project implementation.
        raw_fields:
            Open bag of field content keyed by taxonomy field number.
    """

    token_type: TokenType | None = None
    document_date: str | None = None
    language: str | None = None
    part_a: OfferorInfo = field(default_factory=OfferorInfo)
    part_b: EntityInfo | None = None
    part_c: EntityInfo | None = None
    part_d: ProjectInfo = field(default_factory=ProjectInfo)
    part_e: OfferingInfo = field(default_factory=OfferingInfo)
    part_f: TokenInfo = field(default_factory=TokenInfo)
    part_g: RightsInfo = field(default_factory=RightsInfo)
    part_h: TechnologyInfo = field(default_factory=TechnologyInfo)
    part_i: RiskInfo = field(default_factory=RiskInfo)
    part_j: SustainabilityInfo = field(default_factory=SustainabilityInfo)
    management_bodies: ManagementBodies = field(default_factory=ManagementBodies)
    persons_involved: tuple[PersonInvolved, ...] = ()
    raw_fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the raw-field bag so the record stays immutable."""
        if not isinstance(self.raw_fields, MappingProxyType):
            object.__setattr__(self, "raw_fields", MappingProxyType(dict(self.raw_fields)))

    def resolve_path(self, field_path: str) -> Any:
        """Return the value at a dotted attribute path, or None when absent.

        Args:
            field_path: Path such as ``"part_a.lei"`` or ``"part_e.token_price"``.

        Returns:
            The attribute value, or ``None`` if any segment is missing.
        """
        current: Any = self
        for segment in field_path.split("."):
            if current is None:
                return None
            current = getattr(current, segment, None)
        return current


__all__ = [
    "EntityInfo",
    "ManagementBodies",
    "ManagementBodyMember",
    "OfferingInfo",
    "OfferorInfo",
    "PersonInvolved",
    "ProjectInfo",
    "RightsInfo",
    "RiskInfo",
    "SustainabilityInfo",
    "TechnologyInfo",
    "TokenInfo",
    "WhitepaperData",
]
