"""
Path normalization and resolution of relative references.

- 'normalize_path()' removes '.' and '..' segments and repeated slashes.
- 'relative_to_absolute()' turns a reference found relative to a parsed
  base IRI into an absolute URI.
"""

import logging

from pyiri.iri import get_connection_part

__all__ = ['normalize_path', 'relative_to_absolute', 'resolve']

log = logging.getLogger(__name__)


def _collapse_path(path: str) -> str:
    """
    Collapses dot segments and repeated slashes with a read cursor over
    the input and a write buffer for the output.

    The result only starts with '/' when a '/.name' segment is reached
    with nothing written yet.

    :param path: the path, without scheme and authority.

    :return: the collapsed path.
    """
    i = 0
    length = len(path)

    # skip ./ and ../ at the beginning of the path
    while i < length:
        if path[i] == '/':
            i += 1
        elif path.startswith('./', i):
            i += 2
        elif path.startswith('../', i):
            i += 3
        else:
            break

    out = []
    while i < length:
        ch = path[i]
        if ch != '/':
            out.append(ch)
            i += 1
        elif path.startswith('/.', i):
            if path.startswith('/../', i) or path[i:] == '/..':
                # go one level up
                i += 3
                while out:
                    if out.pop() == '/':
                        break
            elif path.startswith('/./', i) or path[i:] == '/.':
                i += 2
            else:
                out.append(ch)
                i += 1
        elif not out:
            # avoid leading slash
            i += 1
        elif path.startswith('//', i):
            i += 1
        else:
            out.append(ch)
            i += 1

    rval = ''.join(out)
    log.debug('path %s -> %s', path, rval)
    return rval


def normalize_path(path: str) -> str:
    """
    Removes dot segments ('.' and '..') and repeated slashes from a path.

    '..' never climbs above the start of the path, with one exception: a
    trailing '.' or '..' that is the first segment left, as in '..' or
    '/..', is kept as written. An absolute path keeps a single leading
    '/', a relative one does not get one.

    :param path: the path to normalize.

    :return: the normalized path.
    """
    collapsed = _collapse_path(path)
    # a '/.name' segment reached with nothing written is copied with its '/'
    if path.startswith('/'):
        if collapsed.startswith('/'):
            return collapsed
        return '/' + collapsed
    if collapsed.startswith('/'):
        return collapsed[1:]
    return collapsed


def relative_to_absolute(base, tag, val, length=None):
    """
    Converts a reference found in the context of a base IRI to an absolute
    URI.

    Cases are tested in this order:

    - '//authority/path': network path, takes the scheme of the base
      ('http' if the base has none).
    - '/path': absolute path below the connection part.
    - anything holding a ':': already absolute, returned as is.
    - anything else: merged with the directory of the base path.

    :param base: the parsed base IRI.
    :param tag: the connection part of the base, None to compute it.
    :param val: the reference.
    :param [length]: only use the first length characters of val.

    :return: the absolute URI.
    """
    if length is not None:
        val = val[:length]
    if tag is None:
        tag = get_connection_part(base)

    log.debug('*url = %s', val)

    if val.startswith('//'):
        # absolute URI without scheme: //authority/path...
        sep = val.find('/', 2)
        if sep >= 0:
            val = val[:sep + 1] + _collapse_path(val[sep + 1:])
        scheme = base.scheme if base.scheme is not None else 'http'
        rval = '%s:%s' % (scheme, val)
        log.debug('network path %s', rval)
    elif val.startswith('/'):
        rval = '%s/%s' % (tag, _collapse_path(val))
        log.debug('absolute path %s', rval)
    elif ':' in val:
        rval = val
        log.debug('absolute URI %s', rval)
    else:
        base_path = base.path
        lastsep = base_path.rfind('/') if base_path is not None else -1
        if lastsep >= 0:
            path = base_path[:lastsep + 1] + val
        else:
            path = val
        rval = '%s/%s' % (tag, _collapse_path(path))
        log.debug('relative path %s', rval)

    return rval


resolve = relative_to_absolute
