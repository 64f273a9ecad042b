# SPDX-License-Identifier: Apache-2.0
"""Langbly Translator - batched machine translation of structured documents."""

__version__ = "0.1.0"
