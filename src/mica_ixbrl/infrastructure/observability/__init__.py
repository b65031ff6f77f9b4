# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Prometheus metrics."""
