# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Inline XBRL generation and validation for MiCA crypto-asset white papers."""

__version__ = "0.1.0"
