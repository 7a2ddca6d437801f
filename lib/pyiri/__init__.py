""" The PyIRI module is used to parse and resolve IRI references. """
from . import ctype
from . import iri
from . import iri_resolver
from .ctype import is_gen_delim, is_reserved, is_sub_delim, is_unreserved
from .iri import (IRI, IriError, connection_part, get_connection_part, parse,
                  release)
from .iri_resolver import normalize_path, relative_to_absolute, resolve

__all__ = [
    'ctype', 'iri', 'iri_resolver',
    'IRI', 'IriError', 'parse', 'release', 'get_connection_part',
    'connection_part', 'normalize_path', 'relative_to_absolute', 'resolve',
    'is_gen_delim', 'is_sub_delim', 'is_reserved', 'is_unreserved'
]
