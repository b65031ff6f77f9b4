# tests/fixtures/leis.py
"""Legal Entity Identifiers shared by the test suite."""

from __future__ import annotations

# Checksum-valid identifiers (ISO 17442 MOD 97-10 remainder of 1).
OFFEROR_LEI = "529900T8BM49AURSDO55"
ISSUER_LEI = "5493001KJTIIGC8Y1R12"
OPERATOR_LEI = "969500ABCDEFGH123442"
OTHER_LEI = "HWUPKR0MPOU8FGXBT394"

# Well-formed but with wrong check digits.
BAD_CHECKSUM_LEI = "529900T8BM49AURSDO56"
