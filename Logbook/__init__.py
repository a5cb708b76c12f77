"""
Logbook client package.

Keeps a local copy of a remote activity logbook in sync, and derives the
searched, filtered, sorted and paginated views (plus CSV exports) from it.
"""
import logging

# Applications using this package should configure their own logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

VERSION = "0.1.0"
