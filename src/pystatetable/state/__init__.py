"""State/store layer.

This package owns the key-value state table, the canonical string form of
values stored in it, and the change notifications it emits.
"""
