"""Remote classifier implementations."""
