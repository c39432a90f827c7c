"""
Discount Tool Package

Retail deal calculator: final price, discount rate, or reconstructed original
price from pricing parameters, with promotional bundles, tax and shipping.
"""

__version__ = "1.0.0"
