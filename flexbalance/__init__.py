"""
flexbalance - flex time balance and days-off accounting.
"""

__version__ = "0.1.0"
