# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Command-line entrypoints."""
