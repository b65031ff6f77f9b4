# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: logging, metrics and external API clients."""
