"""
Pricer Package

Quote pricing engine for a mobile quoting application.
Prices catalog products with percentage and fixed-per-unit multipliers, then
rolls lines up into subtotal, discount, tax and grand total.
"""

__version__ = "1.0.0"
