"""
Character classes of the URI/IRI grammar.

.. module:: pyiri.ctype
  :synopsis: Gen-delimiter, sub-delimiter and unreserved character tests

The table covers the 256 byte values. Characters outside it belong to none
of the classes.
"""

import string

__all__ = [
    'is_gen_delim', 'is_sub_delim', 'is_reserved', 'is_unreserved',
    'CTYPE_GEN_DELIM', 'CTYPE_SUB_DELIM', 'CTYPE_UNRESERVED'
]

CTYPE_GEN_DELIM = 1 << 0
CTYPE_SUB_DELIM = 1 << 1
CTYPE_UNRESERVED = 1 << 2

GEN_DELIMS = ':/?#[]@'
SUB_DELIMS = '!$&\\\'()*+,;='
UNRESERVED = string.ascii_letters + string.digits + '-._~'


def _build_table():
    table = [0] * 256
    for c in GEN_DELIMS:
        table[ord(c)] |= CTYPE_GEN_DELIM
    for c in SUB_DELIMS:
        table[ord(c)] |= CTYPE_SUB_DELIM
    for c in UNRESERVED:
        table[ord(c)] |= CTYPE_UNRESERVED
    return tuple(table)


_ctype = _build_table()


def _flags(c):
    if isinstance(c, int):
        code = c
    elif isinstance(c, str) and len(c) == 1:
        code = ord(c)
    else:
        return 0
    if 0 <= code < 256:
        return _ctype[code]
    return 0


def is_gen_delim(c):
    """
    Returns True if the character is one of ``: / ? # [ ] @``.

    :param c: a one-character string or an integer code point.
    """
    return bool(_flags(c) & CTYPE_GEN_DELIM)


def is_sub_delim(c):
    """
    Returns True if the character is one of ``! $ & \\ ' ( ) * + , ; =``.

    :param c: a one-character string or an integer code point.
    """
    return bool(_flags(c) & CTYPE_SUB_DELIM)


def is_reserved(c):
    return bool(_flags(c) & (CTYPE_GEN_DELIM | CTYPE_SUB_DELIM))


def is_unreserved(c):
    return bool(_flags(c) & CTYPE_UNRESERVED)
