"""Credential hashing and token digest helpers."""
