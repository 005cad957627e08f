"""Catalog package for filetagger.

This package holds the stateful core of the tagger:

- MediaScanner: Finds input files whose extension is accepted.
- TagRecord: Tags of one file and the rename that stores them.
- Catalog: All records of a session, reconciliation with the output
  directory, and the navigation cursor.

Example:
    >>> from filetagger.catalog import Catalog
    >>> catalog = Catalog(Path("photos"), Path("tagged"))
    >>> catalog.populate(["jpg"])
    >>> catalog.reconcile_with_existing_output()
    >>> catalog.materialize_pending()
"""

from .catalog import Catalog
from .media_scanner import MediaScanner, normalize_extension
from .tag_record import TagRecord

__all__ = ["Catalog", "MediaScanner", "TagRecord", "normalize_extension"]
