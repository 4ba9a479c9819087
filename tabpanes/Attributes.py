import tabpanesrt

class Attributes:
    """An ordered bag of HTML attributes.

    Defaults are applied first and explicit attributes on top of them, so the
    explicit value wins for every key except class, where the tokens of both
    are kept (defaults first). Keys keep the position they were first set at.

    >>> str(Attributes({'id': 'one', 'class': 'active'}, {'class': 'tab-pane', 'id': 'x'}))
    "class='tab-pane active' id='one'"
    """
    def __init__(self, attributes=None, defaults=None):
        self.attributes = {}
        self.update(defaults or {})
        self.update(attributes or {})

    def update(self, attributes):
        for k, v in attributes.items():
            if k == 'class':
                self.addClass(v)
            else:
                self.attributes[k] = v
        return self

    def addClass(self, classes):
        "Add one or more space separated classes, skipping ones already present"
        current = self.attributes.setdefault('class', [])
        for c in _tokens(classes):
            if c not in current:
                current.append(c)
        return self

    def items(self):
        return self.attributes.items()

    def __str__(self):
        return tabpanesrt.attrstr(self.attributes)

def _tokens(classes):
    if classes is None:
        return []
    if isinstance(classes, (list, tuple)):
        return [t for c in classes for t in _tokens(c)]
    return tabpanesrt.tostr(classes).split()
