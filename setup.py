# -*- coding: utf-8 -*-
"""
PyIRI
=====

PyIRI_ parses IRI/URI references, normalizes their paths and resolves
relative references against a base.

.. _PyIRI: http://github.com/pyiri/pyiri
"""

from setuptools import setup
import os

# get meta data
about = {}
with open(os.path.join(
        os.path.dirname(__file__), 'lib', 'pyiri', '__about__.py')) as fp:
    exec(fp.read(), about)

with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as fp:
    long_description = fp.read()

setup(
    name='PyIRI',
    version=about['__version__'],
    description='IRI/URI reference parsing and resolution',
    long_description=long_description,
    author='PyIRI contributors',
    url='http://github.com/pyiri/pyiri',
    packages=['pyiri', 'pyiri.documentloader'],
    package_dir={'': 'lib'},
    license='GPLv3+',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries',
    ],
    python_requires='>=3.7',
    install_requires=[],
    extras_require={
        'requests': ['requests'],
        'aiohttp': ['aiohttp'],
        'tests': ['pytest', 'requests', 'aiohttp'],
    }
)
