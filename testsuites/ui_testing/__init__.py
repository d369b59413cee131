"""Browser-driven registration and login suites."""
