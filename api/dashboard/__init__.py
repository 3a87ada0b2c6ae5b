"""
Admin dashboard summary.
"""
