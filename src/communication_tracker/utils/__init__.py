"""Shared helpers: request logging middleware and BSON serialization."""
