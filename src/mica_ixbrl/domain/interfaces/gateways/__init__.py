# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Gateway protocols implemented by the adapters layer."""
