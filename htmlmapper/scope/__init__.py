"""
Scope - document views the mapper queries through

All selector matching goes through Scope.find, which delegates to
BeautifulSoup's CSS engine (soupsieve).
"""

from htmlmapper.scope.scope import Scope, DocumentIndex
from htmlmapper.scope.resolver import resolve_scope

__all__ = [
    'Scope',
    'DocumentIndex',
    'resolve_scope',
]
