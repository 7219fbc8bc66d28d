"""
Strukly: receipt documentation and revenue analytics for small merchants.
"""

__version__ = "0.1.0"
