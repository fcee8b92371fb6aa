"""Domain layer. Depends on nothing outside the standard library."""
