"""Caching Service Implementation.

Provides the in-memory ResponseCache behind the CacheService interface,
with per-entry TTL and lazy expiry.
Bounded Context: Cache Management
"""
