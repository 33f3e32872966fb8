"""
API and domain models shared across layers.
"""
