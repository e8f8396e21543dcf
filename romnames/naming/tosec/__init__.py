"""TOSEC Naming Convention support."""

from romnames.naming.tosec.parser import parse, parse_multiset
from romnames.naming.tosec.tokens import TOSECMultiSetName, TOSECName

__all__ = ['parse', 'parse_multiset', 'TOSECName', 'TOSECMultiSetName']
