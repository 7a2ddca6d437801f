"""
Remote document loader using aiohttp.

.. module:: pyiri.documentloader.aiohttp
  :synopsis: Remote document loader using aiohttp
"""

import asyncio
import logging
import threading

from pyiri.documentloader import (DEFAULT_HEADERS, REDIRECT_STATUSES,
                                  check_url, make_document, redirect_target)
from pyiri.iri import IriError

log = logging.getLogger(__name__)

# Background event loop (used when inside an existing async environment)
_background_loop = None
_background_thread = None


def _ensure_background_loop():
    """Start a persistent background event loop if not running."""
    global _background_loop, _background_thread
    if _background_loop is None:
        _background_loop = asyncio.new_event_loop()

        def run_loop(loop):
            asyncio.set_event_loop(loop)
            loop.run_forever()

        _background_thread = threading.Thread(
            target=run_loop, args=(_background_loop,), daemon=True)
        _background_thread.start()
    return _background_loop


def aiohttp_document_loader(secure=False, max_redirects=20, **kwargs):
    """
    Create an Asynchronous document loader using aiohttp.

    :param secure: require all requests to use HTTPS (default: False).
    :param max_redirects: maximum number of redirects followed.
    :param **kwargs: extra keyword args for the aiohttp request get() call.

    :return: the RemoteDocument loader function.
    """
    import aiohttp

    async def async_loader(url, headers):
        """
        Retrieves the document at the given URL asynchronously.

        :param url: the URL to retrieve.
        :param headers: the request headers.

        :return: the RemoteDocument.
        """
        try:
            iri, tag = check_url(url, secure)
            redirect_count = 0
            async with aiohttp.ClientSession() as session:
                while True:
                    async with session.get(url,
                                           headers=headers,
                                           allow_redirects=False,
                                           **kwargs) as response:
                        location = response.headers.get('location')
                        if (response.status in REDIRECT_STATUSES and
                                location):
                            target = redirect_target(
                                iri, tag, location,
                                redirect_count, max_redirects)
                            log.debug('redirect %s -> %s', url, target)
                            url = target
                            iri, tag = check_url(url, secure)
                            redirect_count += 1
                            continue
                        response.raise_for_status()
                        text = await response.text()
                        return make_document(
                            url, response.headers.get('content-type'), text,
                            iri, tag, response.headers.get('link'))
        except IriError as e:
            raise e
        except Exception as cause:
            raise IriError(
                'Could not retrieve a document from the URL.',
                'pyiri.LoadDocumentError', {'url': url},
                code='loading document failed', cause=cause)

    def loader(url, options=None):
        """
        Retrieves the document at the given URL synchronously.

        Works safely in both synchronous and asynchronous environments.

        :param url: the URL to retrieve.
        :param options: the request options.

        :return: the RemoteDocument.
        """
        if options is None:
            options = {}
        headers = options.get('headers', DEFAULT_HEADERS)

        # Detect whether we're already in an async environment
        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        # Sync environment
        if not running_loop or not running_loop.is_running():
            return asyncio.run(async_loader(url, headers))

        # Inside async environment: use background event loop
        loop = _ensure_background_loop()
        future = asyncio.run_coroutine_threadsafe(
            async_loader(url, headers), loop)
        return future.result()

    return loader
