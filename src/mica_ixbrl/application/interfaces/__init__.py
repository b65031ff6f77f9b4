# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Application-level interfaces."""
