# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Application layer: DTOs, interfaces and use cases."""
