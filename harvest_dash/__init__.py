"""
Harvest Dash - collect crops, dodge scarecrows, beat the clock.
"""

__version__ = "0.1.0"
