"""Framework unit tests (fake pages, no browser)."""
