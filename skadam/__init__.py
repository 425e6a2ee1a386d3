"""
SKADAM café backend

Menu, table orders, inventory, loyalty and promotions for a single café,
with order settlement tying them together.
"""

__version__ = "1.0.0"
