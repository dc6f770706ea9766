"""Game domain services: scoring rules and the per-user scoring engine.

This package contains the domain logic imported by the HTTP routes, keeping
transport concerns separated from core game mechanics.
"""
