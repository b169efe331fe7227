"""API Resilience Implementations.

Contains the controller that wraps calls with cache consultation, linear
backoff retries and degrade-to-substitute fallback.
Bounded Context: API Resilience
"""
