"""AdGenius: product photo to ad campaign generator"""

__version__ = "0.1.0"
