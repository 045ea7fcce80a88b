"""
csvtable – in-memory CSV tables.

Loads delimited text into a header-indexed row collection, supports lookups,
search, cell mutation, concatenation of compatible tables, and writing back
to disk.
"""
