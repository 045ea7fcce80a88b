"""
Table model, schema checks, and CSV contract management.

Handles parsing CSV streams and files into tables, enforcing header/row width
rules, and writing tables back to disk.
"""
