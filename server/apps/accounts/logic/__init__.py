"""Business logic layer for accounts app.

Account records are created explicitly at session start and are only
ever changed by adding or removing organization memberships.
"""
