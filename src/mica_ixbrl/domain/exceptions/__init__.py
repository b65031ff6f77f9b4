# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Domain exception hierarchy."""
