"""minup's test suite."""
