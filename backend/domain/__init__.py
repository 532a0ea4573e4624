"""
Domain Layer

Value types shared by the ORM entities in models.py and the query
projections in dtos/query.

Structure:
- value_objects/: Immutable value types without identity
"""
