# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Domain entities (frozen dataclasses)."""
