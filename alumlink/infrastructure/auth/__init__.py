"""Credential sources and the token provider."""
