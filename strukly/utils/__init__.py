"""
Shared utilities: configuration, logging, normalization, i18n and formatting.
"""
