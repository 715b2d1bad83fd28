"""
JSON vs TOON comparison tooling.
"""
