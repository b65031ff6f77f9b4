# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Domain layer: entities, enums, taxonomy catalog and pure services."""
