"""Domain Models: value objects, routing mode and error types."""
