"""
pygame adapters for Harvest Dash.
"""
