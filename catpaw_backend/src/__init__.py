"""
Top-level src package marker for catpaw_backend.

Holds the bootstrap steps, the safe logging toolkit and the dev server app.
"""
