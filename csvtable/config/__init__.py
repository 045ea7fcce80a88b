"""
Configuration loading and validation for table parsing and writing.

Provides strongly typed settings objects populated from environment variables
(and an optional .env file) with upfront validation.
"""
