"""
Services

- config/ - Defaults, store, fetch/activate and typed accessors
"""
