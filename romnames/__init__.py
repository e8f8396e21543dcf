"""
romnames - ROM filename parsing for the TOSEC, No-Intro and GoodTools conventions

Tokenizes catalog file names into lossless token streams, resolves their
region tags, extracts normalized metadata and reconstructs canonical names.
"""

__version__ = "0.3.0"
__author__ = "jbruns"
