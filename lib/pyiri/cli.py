#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pyiricli - CLI script for PyIRI
"""
import json
import logging
import sys

import pyiri.iri
import pyiri.iri_resolver

log = logging.getLogger()


def parse_to_json(uri, options):
    """
    Parse an IRI reference and generate a JSON string of its components

    :param uri: the IRI reference
    :param options: options dict
    :returns: JSON string
    :rtype: str
    """
    log.debug("parse_to_json: %r, %r" % (uri, options))
    iri = pyiri.iri.parse(uri)
    output = iri.as_dict()
    if options.get('connection_part'):
        output['connectionPart'] = pyiri.iri.get_connection_part(iri)
    pyiri.iri.release(iri)
    return json.dumps(output, indent=options.get('indent', 1))


def resolve(ref, base, options):
    """
    Resolve a reference against a base IRI

    :param ref: the reference found in the context of base
    :param base: the base IRI
    :param options: options dict
    :returns: the absolute URI
    :rtype: str
    """
    log.debug("resolve: %r, %r, %r" % (ref, base, options))
    base_iri = pyiri.iri.parse(base)
    try:
        return pyiri.iri_resolver.relative_to_absolute(
            base_iri, options.get('tag'), ref, options.get('length'))
    finally:
        pyiri.iri.release(base_iri)


def load_to_json(url, options):
    loader = pyiri.iri.requests_document_loader(secure=options.get('secure'))
    doc = loader(url)
    log.debug("load_to_json: len(document): %d" % len(doc['document']))
    return json.dumps(doc, indent=options.get('indent', 1))


def main(*argv):
    import argparse

    prs = argparse.ArgumentParser(prog='pyiri')

    prs.add_argument('--parse',
                     help='TASK: Print the components of an IRI as JSON',
                     dest='parse',
                     action='store')
    prs.add_argument('--connection-part',
                     help='TASK: Print the connection part of an IRI',
                     dest='connection_part',
                     action='store')
    prs.add_argument('--normalize',
                     help='TASK: Remove dot segments from a path',
                     dest='normalize',
                     action='store')
    prs.add_argument('--resolve',
                     help='TASK: Resolve a reference against --base',
                     dest='resolve',
                     action='store')
    prs.add_argument('--load',
                     help='TASK: Retrieve a URL, following redirects',
                     dest='load',
                     action='store')

    prs.add_argument('--base',
                     help='Base IRI to resolve against',
                     dest='base',
                     action='store')
    prs.add_argument('--tag',
                     help='Connection part to use instead of the base\'s',
                     dest='tag',
                     action='store')
    prs.add_argument('--length',
                     help='Only use the first n characters of the reference',
                     dest='length',
                     action='store',
                     type=int)
    prs.add_argument('--secure',
                     help='Only load "https" URLs',
                     dest='secure',
                     action='store_true',
                     default=False)
    prs.add_argument('--indent',
                     help='Indent json with n spaces [default: 1]',
                     dest='indent',
                     action='store',
                     type=int,
                     default=1)

    prs.add_argument('-v', '--verbose',
                     dest='verbose',
                     action='store_true',)
    prs.add_argument('-q', '--quiet',
                     dest='quiet',
                     action='store_true',)
    if not argv:
        _argv = sys.argv[1:]
    else:
        _argv = list(argv)
    opts = prs.parse_args(args=_argv)

    if not opts.quiet:
        logging.basicConfig()

        if opts.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    if opts.resolve is not None and opts.base is None:
        prs.error('--resolve requires --base')

    options = {
        'indent': opts.indent,
        'tag': opts.tag,
        'length': opts.length,
        'secure': opts.secure,
    }

    if opts.parse is not None:
        options['connection_part'] = True
        print(parse_to_json(opts.parse, options))

    if opts.connection_part is not None:
        iri = pyiri.iri.parse(opts.connection_part)
        print(pyiri.iri.get_connection_part(iri))
        pyiri.iri.release(iri)

    if opts.normalize is not None:
        print(pyiri.iri_resolver.normalize_path(opts.normalize))

    if opts.resolve is not None:
        print(resolve(opts.resolve, opts.base, options))

    if opts.load is not None:
        print(load_to_json(opts.load, options))

    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:]))
