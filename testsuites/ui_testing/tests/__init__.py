"""Registration, login and navigation UI tests."""
