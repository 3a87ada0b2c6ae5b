"""
Donation categories and the goods items donors can contribute.
"""
