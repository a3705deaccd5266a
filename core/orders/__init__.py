"""
OrderDesk Orders
================
Order/invoice aggregate, line items and the order number counter.
"""
