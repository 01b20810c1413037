"""
Cohort CRUD endpoints.
"""
