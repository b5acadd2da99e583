"""
Billing Kernel

Foundation for the billing computation core:
- Exact-decimal amounts and Money/Currency/ExchangeRate value objects
- ISO 4217 currency registry
- Injectable clock
- Typed exceptions with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
