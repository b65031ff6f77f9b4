# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Adapters layer: gateways and mappers."""
