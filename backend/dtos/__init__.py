"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple callers from the database models.

Structure:
- request/: search criteria passed into repositories and services
- query/: read-only projections assembled directly by query repositories
"""
