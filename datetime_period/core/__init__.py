"""
Core domain models.

Period value type and instant helpers. Independent of any storage or
transport.
"""
