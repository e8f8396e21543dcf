"""No-Intro naming convention support."""

from romnames.naming.nointro.parser import parse
from romnames.naming.nointro.tokens import NoIntroName

__all__ = ['parse', 'NoIntroName']
