# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Pure domain services for fact-model generation and validation."""
