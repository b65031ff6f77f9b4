# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""External API clients."""
