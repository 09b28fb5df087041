"""Vault core: providers, parser and the query/mutation operations."""
