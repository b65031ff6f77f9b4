from __future__ import annotations

import pytest

from fixtures.leis import ISSUER_LEI

from mica_ixbrl.adapters.mappers.gleif_record_mapper import map_gleif_record
from mica_ixbrl.domain.exceptions.mica import LeiRegistryError


def test_maps_status_and_legal_name() -> None:
    record = map_gleif_record(
        ISSUER_LEI,
        {
            "data": {
                "attributes": {
                    "lei": ISSUER_LEI.lower(),
                    "entity": {"legalName": {"name": "Issuer AG", "language": "de"}},
                    "registration": {"status": "LAPSED"},
                }
            }
        },
    )

    assert record.lei == ISSUER_LEI
    assert record.found
    assert record.registration_status == "LAPSED"
    assert record.legal_name == "Issuer AG"


def test_sparse_attributes_map_to_unknowns() -> None:
    record = map_gleif_record(ISSUER_LEI, {"data": {"attributes": {"entity": "?"}}})

    assert record.lei == ISSUER_LEI
    assert record.registration_status is None
    assert record.legal_name is None


def test_missing_attributes_are_rejected() -> None:
    with pytest.raises(LeiRegistryError) as info:
        map_gleif_record(ISSUER_LEI, {"data": {"id": ISSUER_LEI}})

    assert info.value.details == {"lei": ISSUER_LEI}
