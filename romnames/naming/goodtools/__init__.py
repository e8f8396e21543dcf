"""GoodTools naming convention support."""

from romnames.naming.goodtools.parser import parse
from romnames.naming.goodtools.tokens import GoodToolsName

__all__ = ['parse', 'GoodToolsName']
