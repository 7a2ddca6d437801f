"""
Helpers shared by the remote document loaders.

.. module:: pyiri.documentloader
  :synopsis: URL checks, redirect and Link header resolution for loaders
"""

from pyiri.iri import (IriError, get_connection_part, parse,
                       parse_link_header)
from pyiri.iri_resolver import relative_to_absolute

REDIRECT_STATUSES = (301, 302, 303, 307, 308)

DEFAULT_HEADERS = {'Accept': '*/*'}


def check_url(url, secure=False):
    """
    Parses a URL to be dereferenced.

    :param url: the URL to retrieve.
    :param secure: only accept "https" URLs.

    :return: the parsed IRI and its connection part.
    """
    iri = parse(url)
    scheme = (iri.scheme or '').lower()
    if scheme not in ('http', 'https') or not iri.host:
        raise IriError(
            'URL could not be dereferenced; only "http" and "https" '
            'URLs are supported.',
            'pyiri.InvalidUrl', {'url': url},
            code='loading document failed')
    if secure and scheme != 'https':
        raise IriError(
            'URL could not be dereferenced; secure mode enabled and '
            'the URL\'s scheme is not "https".',
            'pyiri.InvalidUrl', {'url': url},
            code='loading document failed')
    return iri, get_connection_part(iri)


def redirect_target(iri, tag, location, redirect_count, max_redirects):
    """
    Resolves the Location of a redirect response against the request URL.

    :return: the absolute URL to follow.
    """
    if redirect_count >= max_redirects:
        raise IriError(
            'URL could not be dereferenced; exceeded maximum redirects '
            '(%d).' % max_redirects,
            'pyiri.TooManyRedirects',
            {'url': iri.original, 'location': location},
            code='too many redirects')
    return relative_to_absolute(iri, tag, location)


def resolve_links(iri, tag, header):
    """
    Parses a Link header and makes every target absolute.

    :param iri: the parsed URL the header was received from.
    :param tag: the connection part of iri.
    :param header: the Link header value.

    :return: the parsed links keyed by "rel".
    """
    links = parse_link_header(header)
    for entries in links.values():
        if not isinstance(entries, list):
            entries = [entries]
        for entry in entries:
            entry['target'] = relative_to_absolute(iri, tag, entry['target'])
    return links


def make_document(url, content_type, text, iri, tag, link_header):
    doc = {
        'contentType': content_type or 'application/octet-stream',
        'documentUrl': url,
        'document': text,
        'links': {}
    }
    if link_header:
        doc['links'] = resolve_links(iri, tag, link_header)
    return doc
