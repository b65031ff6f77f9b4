# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Typed application configuration."""
