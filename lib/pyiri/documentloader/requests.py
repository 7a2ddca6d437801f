"""
Remote document loader using Requests.

.. module:: pyiri.documentloader.requests
  :synopsis: Remote document loader using Requests

Redirects are followed by the loader itself so that every Location is
resolved with :func:`pyiri.iri_resolver.relative_to_absolute`. One
``requests.Session`` is kept per connection part.
"""
import logging

from pyiri.documentloader import (DEFAULT_HEADERS, REDIRECT_STATUSES,
                                  check_url, make_document, redirect_target)
from pyiri.iri import IriError

log = logging.getLogger(__name__)


def requests_document_loader(secure=False, max_redirects=20, **kwargs):
    """
    Create a Requests document loader.
    Can be used to setup extra Requests args such as verify, cert, timeout,
    or others.
    :param secure: require all requests to use HTTPS (default: False).
    :param max_redirects: maximum number of redirects followed.
    :param **kwargs: extra keyword args for Requests get() call.
    :return: the RemoteDocument loader function.
    """
    import requests

    sessions = {}

    def get_session(tag):
        session = sessions.get(tag)
        if session is None:
            log.debug('new session for %s', tag)
            session = sessions[tag] = requests.Session()
        return session

    def loader(url, options=None, redirect_count=0):
        """
        Retrieves the document at the given URL.
        :param url: the URL to retrieve.
        :param options: the request options, 'headers' sets the headers.
        :return: the RemoteDocument.
        """
        if options is None:
            options = {}
        try:
            iri, tag = check_url(url, secure)
            headers = options.get('headers')
            if headers is None:
                headers = DEFAULT_HEADERS
            response = get_session(tag).get(
                url, headers=headers, allow_redirects=False, **kwargs)

            location = response.headers.get('location')
            if response.status_code in REDIRECT_STATUSES and location:
                target = redirect_target(
                    iri, tag, location, redirect_count, max_redirects)
                log.debug('redirect %s -> %s', url, target)
                return loader(target, options=options,
                              redirect_count=redirect_count + 1)
            response.raise_for_status()

            return make_document(
                url, response.headers.get('content-type'), response.text,
                iri, tag, response.headers.get('link'))
        except IriError as e:
            raise e
        except Exception as cause:
            raise IriError(
                'Could not retrieve a document from the URL.',
                'pyiri.LoadDocumentError', {'url': url},
                code='loading document failed', cause=cause)

    def close():
        """
        Closes every pooled session. The loader opens new sessions if it is
        used again.
        """
        while sessions:
            tag, session = sessions.popitem()
            log.debug('closing session for %s', tag)
            session.close()

    loader.sessions = sessions
    loader.close = close
    return loader
