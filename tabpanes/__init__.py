from tabpanes.Tabbable import (
    Tabbable, TabSpec, ContentItem, MissingField, render, TAB, PILL,
)
from tabpanes.Navigation import Navigation, Link, TABS, PILLS, NAVBAR
from tabpanes.Attributes import Attributes

_cache = {}

def load(path, navigation=None):
    """Load the given JSON tab definition, returning a configured Tabbable.

    The .json suffix may be left off. Definitions are cached until the file
    changes.
    """
    import os, json
    if not path.endswith('.json') and os.path.exists(path + '.json'):
        path += '.json'
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    mtime = os.stat(path).st_mtime
    if path not in _cache or _cache[path][0] != mtime:
        with open(path) as f:
            _cache[path] = mtime, json.load(f)
    return Tabbable.from_definition(_cache[path][1], navigation)
