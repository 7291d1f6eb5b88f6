"""
Takeout - MP3 extraction from Google Takeout music archives.

This package provides tools to:
- Walk a zip archive and pick out the MP3 entries
- Extract each entry into a working directory, skipping files already there
- Read and report the ID3 tags of every extracted file
"""

__version__ = "0.1.0"
