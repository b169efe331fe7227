"""HTTP transport for the real backend (httpx based)."""
