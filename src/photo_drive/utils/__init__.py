"""Shared helpers: constants, errors and naming."""
