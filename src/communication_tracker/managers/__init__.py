"""Business logic managers and the logging manager."""
