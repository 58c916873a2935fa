"""
cidzor: portfolio site core

Poker pot-odds puzzle engine (hand evaluation, outs, puzzle generation)
and the SQLite-backed article store behind the site's blog.
"""

__version__ = "0.1.0"
