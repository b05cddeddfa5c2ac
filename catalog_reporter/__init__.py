"""
Catalog Reporter.

Loads a flat product catalog, cleans it and answers a fixed set of
analytical questions over it.
"""

__version__ = "0.1.0"
