"""Domains – cache registrations for concrete domain services."""
