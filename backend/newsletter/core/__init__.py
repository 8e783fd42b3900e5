"""Core Layer — domain error types, no IO, no async, no framework imports."""
