# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Structured logging."""
