# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Static MiCA taxonomy catalog (field definitions and enumerations)."""
