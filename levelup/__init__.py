"""
LevelUp - youth wrestling coaching web application.
"""

__version__ = "0.1.0"
