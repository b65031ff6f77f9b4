# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Document mappers."""
