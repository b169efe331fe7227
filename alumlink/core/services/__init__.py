"""Application services built on the facade and the resilience controller."""
