"""Application layer: use cases and the unit-of-work contract they run in."""
