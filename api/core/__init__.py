"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (DB handle,
settings, logging, error translation). Feature-specific SQL lives in the
feature package (e.g. `students/repository.py`).
"""
