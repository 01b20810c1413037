"""
Student CRUD endpoints. Reads resolve the student's cohort.
"""
