"""
fieldcheck: Declarative per-record field validation and phone rewriting.

Validates configured input fields against format, range, enum and pattern
rules, rewrites phone numbers into a normalized representation, and
annotates each record with a structured error list.
"""

__version__ = "0.3.0"
