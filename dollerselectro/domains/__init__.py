"""Domain layer (shop models, validation rules and pure helpers).

Domain modules should not depend on UI or on the HTTP client; they operate on
plain dicts as returned by the backend.
"""
