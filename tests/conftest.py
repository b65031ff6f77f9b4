# tests/conftest.py
from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Any

import pytest

from fixtures.leis import OFFEROR_LEI

from mica_ixbrl.config.settings import get_settings
from mica_ixbrl.domain.entities.whitepaper import (
    OfferingInfo,
    OfferorInfo,
    ProjectInfo,
    RightsInfo,
    RiskInfo,
    SustainabilityInfo,
    TechnologyInfo,
    TokenInfo,
    WhitepaperData,
)
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.infrastructure.external_apis.gleif.settings import get_gleif_settings


@pytest.fixture(autouse=True)
def _clear_settings_caches() -> Iterator[None]:
    """Let each test observe its own environment."""
    get_settings.cache_clear()
    get_gleif_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_gleif_settings.cache_clear()


@pytest.fixture
def whitepaper() -> WhitepaperData:
    """A complete OTHR record that passes every validation category."""
    return WhitepaperData(
        token_type=TokenType.OTHR,
        document_date="2025-06-30",
        language="en",
        part_a=OfferorInfo(
            legal_name="Example Token Foundation",
            lei=OFFEROR_LEI,
            registered_address="Hauptstrasse 1, 10115 Berlin, Germany",
            country="DE",
            website="https://example.org",
            contact_email="info@example.org",
            contact_phone="+49 30 1234567",
        ),
        part_d=ProjectInfo(
            crypto_asset_name="Example Token",
            crypto_asset_symbol="EXT",
            total_supply=Decimal("1000000"),
            token_standard="ERC-20",
            blockchain_network="Ethereum",
            consensus_mechanism="Proof of Stake",
            project_description="A utility token granting access to the Example platform.",
        ),
        part_e=OfferingInfo(
            is_public_offering=True,
            public_offering_start_date="2025-07-01",
            public_offering_end_date="2025-09-30",
            token_price=Decimal("0.25"),
            token_price_currency="EUR",
            max_subscription_goal=Decimal("5000000"),
            withdrawal_rights="The purchaser has a right of withdrawal within 14 calendar days.",
            payment_methods=("Bank transfer", "USDC"),
        ),
        part_f=TokenInfo(
            classification="Utility token",
            rights_description="Holders may redeem tokens for platform services.",
        ),
        part_g=RightsInfo(
            purchase_rights="Purchasers may withdraw within 14 days.",
            ownership_rights="Tokens confer no ownership in the foundation.",
        ),
        part_h=TechnologyInfo(
            blockchain_description="Ethereum mainnet ERC-20 contract.",
            security_audits=("Audit by Example Security, May 2025",),
        ),
        part_i=RiskInfo(
            offer_risks=("The offer may be withdrawn.",),
            market_risks=("The token price may be volatile.",),
        ),
        part_j=SustainabilityInfo(
            energy_consumption=Decimal("1234.5"),
            consensus_mechanism_type="Proof of Stake",
            renewable_energy_percentage=Decimal("42.5"),
        ),
    )


@pytest.fixture
def make_whitepaper(whitepaper: WhitepaperData) -> Callable[..., WhitepaperData]:
    """Return a factory replacing top-level fields of the sample record."""

    def _make(**changes: Any) -> WhitepaperData:
        return dataclasses.replace(whitepaper, **changes)

    return _make


@pytest.fixture
def whitepaper_payload() -> dict[str, Any]:
    """The sample record as camelCase JSON input."""
    return {
        "tokenType": "othr",
        "documentDate": "2025-06-30",
        "language": "en",
        "partA": {
            "legalName": "Example Token Foundation",
            "lei": OFFEROR_LEI,
            "registeredAddress": "Hauptstrasse 1, 10115 Berlin, Germany",
            "country": "DE",
            "website": "https://example.org",
            "contactEmail": "info@example.org",
        },
        "partD": {
            "cryptoAssetName": "Example Token",
            "cryptoAssetSymbol": "EXT",
            "totalSupply": "1000000",
            "tokenStandard": "ERC-20",
            "blockchainNetwork": "Ethereum",
            "consensusMechanism": "Proof of Stake",
            "projectDescription": "A utility token granting access to the Example platform.",
        },
        "partE": {
            "isPublicOffering": True,
            "publicOfferingStartDate": "2025-07-01",
            "publicOfferingEndDate": "2025-09-30",
            "tokenPrice": 0.25,
            "tokenPriceCurrency": "EUR",
            "withdrawalRights": True,
            "paymentMethods": ["Bank transfer", "USDC"],
        },
        "partH": {"blockchainDescription": "Ethereum mainnet ERC-20 contract."},
        "partJ": {"energyConsumption": "1234.5", "consensusMechanismType": "Proof of Stake"},
        "managementBodyMembers": {
            "offeror": [
                {"identity": "Jane Doe", "businessAddress": "Berlin", "function": "CEO"},
            ],
        },
        "projectPersons": [
            {"identity": "Example Audit GmbH", "businessAddress": "Munich", "role": "auditor"},
        ],
        "rawFields": {"A.2": "Example Token Foundation e.V."},
    }
