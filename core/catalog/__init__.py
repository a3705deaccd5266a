"""
OrderDesk Catalog
=================
Organizations, parties, products and per-country tax configuration.
"""
