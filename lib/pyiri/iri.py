"""
IRI/URI reference parsing.

A reference is split in a single left-to-right scan into scheme, userinfo,
host, port, path, query and fragment. Parsing never fails: malformed input
degrades to empty or verbatim fields, and anything the scan could not
place is reported through the module logger.

.. module:: pyiri.iri
  :synopsis: IRI/URI reference parser and connection part formatter
"""

import logging
import re
import sys
import traceback

from pyiri.__about__ import (__copyright__, __license__, __version__)
from pyiri.ctype import is_gen_delim

__all__ = [
    '__copyright__', '__license__', '__version__',
    'IRI', 'parse', 'release', 'get_connection_part', 'connection_part',
    'parse_link_header', 'set_document_loader', 'get_document_loader',
    'load_document', 'requests_document_loader', 'aiohttp_document_loader',
    'IriError'
]

log = logging.getLogger(__name__)

# isspace() in the C locale
WHITESPACE = ' \t\n\v\f\r'

FIELDS = ('scheme', 'userinfo', 'host', 'port', 'path', 'query', 'fragment')


class IRI(object):
    """
    A parsed IRI reference.

    Every component is a ``(start, end)`` range into the one string the
    reference was parsed from; the attributes slice that string on access.
    Optional components that were not found are None. The host is the empty
    string when there was no authority.
    """

    __slots__ = ('_uri', '_ranges')

    def __init__(self, uri, ranges):
        self._uri = uri
        self._ranges = ranges

    def _component(self, name):
        if self._uri is None:
            return None
        span = self._ranges.get(name)
        if span is None:
            return None
        return self._uri[span[0]:span[1]]

    @property
    def original(self):
        return self._uri

    @property
    def scheme(self):
        return self._component('scheme')

    @property
    def userinfo(self):
        return self._component('userinfo')

    @property
    def host(self):
        if self._uri is None:
            return None
        host = self._component('host')
        return '' if host is None else host

    @property
    def port(self):
        return self._component('port')

    @property
    def path(self):
        return self._component('path')

    @property
    def query(self):
        return self._component('query')

    @property
    def fragment(self):
        return self._component('fragment')

    @property
    def released(self):
        return self._uri is None

    def span(self, name):
        """
        Gets the ``(start, end)`` range of a component within
        :attr:`original`.

        :param name: one of 'scheme', 'userinfo', 'host', 'port', 'path',
          'query' or 'fragment'.

        :return: the range or None if the component is absent.
        """
        if name not in FIELDS:
            raise KeyError(name)
        return self._ranges.get(name)

    def as_dict(self):
        rval = {'original': self.original}
        for name in FIELDS:
            rval[name] = getattr(self, name)
        return rval

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self._uri)


def parse(text):
    """
    Parses an IRI reference.

    URI         = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
    hier-part   = "//" authority path-abempty / path-absolute
                  / path-rootless / path-empty

    Only a ':' reached before any other gen-delimiter ends a scheme. The
    path keeps its leading '/', the query and fragment drop their '?' and
    '#'.

    :param text: the reference, leading whitespace is ignored.

    :return: the IRI.
    """
    uri = text.lstrip(WHITESPACE)
    length = len(uri)
    ranges = {}

    s = 0
    while s < length and not is_gen_delim(uri[s]):
        s += 1
    if s < length and uri[s] == ':':
        ranges['scheme'] = (0, s)
        s += 1
    else:
        # rewind, no scheme
        s = 0

    # this is true for http, https, ftp, file
    if uri.startswith('//', s):
        s += 2

    authority = s
    while s < length and uri[s] not in '/?#':
        s += 1
    authority_end = s
    c, s = _delimiter(uri, s)

    # left over: [path][?query][#fragment]
    if c == '/':
        start = s - 1
        while s < length and uri[s] not in '?#':
            s += 1
        ranges['path'] = (start, s)
        c, s = _delimiter(uri, s)

    if c == '?':
        start = s
        while s < length and uri[s] != '#':
            s += 1
        ranges['query'] = (start, s)
        c, s = _delimiter(uri, s)

    if c == '#':
        ranges['fragment'] = (s, length)
        s = length

    if s < length:
        log.warning('unparsed rest %r', uri[s:])

    if authority < authority_end:
        _parse_authority(uri, authority, authority_end, ranges)

    return IRI(uri, ranges)


def _delimiter(uri, s):
    # returns the delimiter at s (or '') and the position after it
    if s < len(uri):
        return uri[s], s + 1
    return '', s


def _parse_authority(uri, start, end, ranges):
    # authority = [ userinfo "@" ] host [ ":" port ]
    s = start
    at = uri.find('@', start, end)
    if at >= 0:
        ranges['userinfo'] = (start, at)
        s = at + 1

    if s < end and uri[s] == '[':
        bracket = uri.rfind(']', s, end)
        if bracket >= 0:
            ranges['host'] = (s, bracket + 1)
            s = bracket + 1
        else:
            log.debug('unterminated IP literal in %r', uri[start:end])
            ranges['host'] = (s, end)
            s = end
    else:
        host = s
        while s < end and uri[s] != ':':
            s += 1
        ranges['host'] = (host, s)

    if s + 1 < end and uri[s] == ':':
        ranges['port'] = (s + 1, end)


def release(iri):
    """
    Releases the text held by an IRI. The IRI reports None for every
    component afterwards. Releasing None or an already released IRI does
    nothing.

    :param iri: the IRI to release.
    """
    if iri is not None:
        iri._uri = None
        iri._ranges = {}


def get_connection_part(iri):
    """
    Gets the connection part of an IRI, used to key connections to the
    same origin.

    :param iri: the parsed IRI.

    :return: 'scheme://host:port', 'scheme://host', 'host:port' or 'host'.
    """
    if iri.scheme is not None:
        if iri.port is not None:
            return '%s://%s:%s' % (iri.scheme, iri.host, iri.port)
        return '%s://%s' % (iri.scheme, iri.host)
    if iri.port is not None:
        return '%s:%s' % (iri.host, iri.port)
    return iri.host


connection_part = get_connection_part


def parse_link_header(header):
    """
    Parses a link header. The results will be key'd by the value of "rel".

    Link: <http://example.com/next>; rel="next"; type="text/html"

    Parses as: {
      'next': {
        'target': 'http://example.com/next',
        'rel': 'next',
        'type': 'text/html'
      }
    }

    If there is more than one link with the same "rel", then entries in the
    resulting map for that "rel" will be lists. Targets are returned as
    written in the header.

    :param header: the link header to parse.

    :return: the parsed result.
    """
    rval = {}
    # split on unbracketed/unquoted commas
    entries = re.findall(r'(?:<[^>]*?>|"[^"]*?"|[^,])+', header)
    r_link = r'\s*<([^>]*?)>\s*(?:;\s*(.*))?'
    r_params = r'(.*?)=(?:(?:"([^"]*?)")|([^"]*?))\s*(?:(?:;\s*)|$)'
    for entry in entries:
        match = re.search(r_link, entry)
        if not match:
            continue
        target, params = match.groups()
        result = {'target': target}
        for name, quoted, bare in re.findall(r_params, params or ''):
            result[name.strip()] = quoted or bare
        rel = result.get('rel', '')
        if isinstance(rval.get(rel), list):
            rval[rel].append(result)
        elif rel in rval:
            rval[rel] = [rval[rel], result]
        else:
            rval[rel] = result
    return rval


def set_document_loader(load_document):
    """
    Sets the default document loader.

    :param load_document(url, options=None): the document loader to use.
    """
    global _default_document_loader
    _default_document_loader = load_document


def get_document_loader():
    """
    Gets the default document loader.

    :return: the default document loader.
    """
    return _default_document_loader


def load_document(url, options=None):
    """
    Retrieves a document with the default document loader.

    :param url: the absolute http or https URL to retrieve.
    :param [options]: the loader options, 'headers' sets request headers.

    :return: the RemoteDocument dict.
    """
    return _default_document_loader(url, options)


def dummy_document_loader(**kwargs):
    """
    Create a dummy document loader that will raise an exception on use.

    :param **kwargs: extra keyword args

    :return: the RemoteDocument loader function.
    """

    def loader(url, options=None):
        raise IriError('No default document loader configured',
                       'pyiri.NoDocumentLoader', {'url': url},
                       code='no default document loader')

    return loader


def requests_document_loader(**kwargs):
    import pyiri.documentloader.requests

    return pyiri.documentloader.requests.requests_document_loader(**kwargs)


def aiohttp_document_loader(**kwargs):
    import pyiri.documentloader.aiohttp

    return pyiri.documentloader.aiohttp.aiohttp_document_loader(**kwargs)


class IriError(Exception):
    """
    Base class for errors raised while dereferencing IRIs.
    """

    def __init__(self, message, type_, details=None, code=None, cause=None):
        Exception.__init__(self, message)
        self.type = type_
        self.details = details
        self.code = code
        self.cause = cause
        self.causeTrace = traceback.extract_tb(*sys.exc_info()[2:])

    def __str__(self):
        rval = str(self.args)
        rval += '\nType: ' + self.type
        if self.code:
            rval += '\nCode: ' + self.code
        if self.details:
            rval += '\nDetails: ' + repr(self.details)
        if self.cause:
            rval += '\nCause: ' + str(self.cause)
            rval += ''.join(traceback.format_list(self.causeTrace))
        return rval


# The default document loader.
try:
    _default_document_loader = requests_document_loader()
except ImportError:
    try:
        _default_document_loader = aiohttp_document_loader()
    except ImportError:
        _default_document_loader = dummy_document_loader()
