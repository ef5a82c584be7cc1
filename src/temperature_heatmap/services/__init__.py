"""
Shared service utilities.

- http.py - Pre-configured ``requests`` session used by datasources
"""
