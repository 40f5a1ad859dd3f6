"""Core settings, auth, errors and logging setup."""
