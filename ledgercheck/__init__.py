"""Double-entry journal validation and voucher projection."""

__version__ = "0.1.0"
