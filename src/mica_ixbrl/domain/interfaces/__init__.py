# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Domain-level interfaces (protocols)."""
