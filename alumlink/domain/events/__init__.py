"""Domain Event definitions.

Represents significant occurrences in the client (failed attempts,
scheduled retries, mode changes, health probes) that other parts of the
system might react to.
"""
