"""
Domain layer package.

Pure business rules. No framework imports and no IO.
"""
