"""
Authenticated user lookup.
"""
