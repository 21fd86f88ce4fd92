"""Schema module for BookVault.

schema.sql in this directory is the source of truth for the data model.
"""
