"""
Generic utility functions shared across modules.

Includes text comparison and row-copy helpers.
"""
