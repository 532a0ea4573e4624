"""
Request DTOs

Criteria objects handed to repositories and services. They validate at the
boundary and stay independent of the database schema.
"""

from .order_search import OrderSearch

__all__ = ["OrderSearch"]
