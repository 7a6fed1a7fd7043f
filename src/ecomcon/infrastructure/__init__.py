"""Infrastructure layer: text stream reading and writing.

This layer depends on stdlib streams and the domain types it produces
(``LogicalLine``, error classes). It must never import from services,
commands, or output.
"""
