# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Gateway implementations."""
