"""
Rename photos (and their raw siblings) after their EXIF capture time.
"""

__version__ = "0.5.0"
