"""Shared helpers for the Primo assistant."""
