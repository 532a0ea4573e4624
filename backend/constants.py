"""
Application-wide constants.

This module centralizes the magic strings and numbers shared by the models,
repositories and services.
"""
from enum import Enum


class ItemType(str, Enum):
    """
    Discriminator values stored in items.dtype for single-table inheritance.
    """

    ITEM = 'I'
    BOOK = 'B'
    ALBUM = 'A'
    MOVIE = 'M'


class QueryLimits:
    """Row limits for search queries"""

    # Order search never returns more than this many rows
    MAX_ORDER_SEARCH_RESULTS = 1000
    DEFAULT_PAGE_SIZE = 100
