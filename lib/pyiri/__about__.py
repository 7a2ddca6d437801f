# PyIRI package metadata

__all__ = [
    '__copyright__', '__license__', '__version__'
]

__copyright__ = 'Copyright (c) 2012-2026 PyIRI contributors'
__license__ = 'GNU General Public License v3 or later (GPLv3+)'
__version__ = '0.9.0'
