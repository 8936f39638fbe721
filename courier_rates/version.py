"""
Calculator Version

Stamped on every bulk quote row so stored quotes can be traced back to the
engine that produced them. Bump on any change that alters a price.
"""

VERSION = "2026.10.1"
