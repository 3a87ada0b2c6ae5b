"""
Committee members and the tiered org chart.
"""
