"""
parallel-aria2: mirror a browsable HTTP/HTTPS directory tree with aria2c.
"""

__version__ = "1.0.0"
