"""Test factories for creating test data."""

from tests.factories.fetchers import FakeFetcher, lookup_body

__all__ = [
    "FakeFetcher",
    "lookup_body",
]
