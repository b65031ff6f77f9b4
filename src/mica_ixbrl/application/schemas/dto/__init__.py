# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Pydantic DTOs crossing the application boundary."""
