"""Bootstrap 3 tabbable panes.

A Tabbable pairs a nav of tab (or pill) links with a tab-content block of
panes. The i-th link opens the i-th pane; both use the same id, which is the
item's content_id when given and the slug of its title otherwise.

    >>> print(Tabbable().as_tabs([
    ...     {'title': 'One', 'content': '<p>A</p>'},
    ... ]).render())
    <ul class='nav nav-tabs' role='tablist'><li class='active'><a href='#one' role='tab' data-toggle='tab'>One</a></li></ul><div class='tab-content'><input type='hidden' id='tab-parent_id' value=''><div class='tab-pane active' id='one'><p>A</p></div></div>
"""
import sys, json, warnings
from collections import namedtuple
from collections.abc import Mapping

from tabpanes.Attributes import Attributes
from tabpanes.Navigation import Navigation, Link
from tabpanesrt import filters, safe, tag, attrstr, tostr, url_for

PILL = 'pill'
TAB = 'tab'

STYLES = {TAB: TAB, 'tabs': TAB, PILL: PILL, 'pills': PILL}

# Keys in an item's data that hold an action url, formatted with the parent id
ACTION_KEYS = ('data-action', 'action')


class MissingField(KeyError):
    "A content item lacks a required field"
    def __init__(self, field, index):
        KeyError.__init__(self, field, index)
        self.field = field
        self.index = index

    def __str__(self):
        return 'content item %d has no %r' % (self.index, self.field)


class ContentItem(namedtuple('ContentItem', 'title content content_id attributes data')):
    REQUIRED = ('title', 'content')
    MAPPINGS = ('attributes', 'data')

    def __new__(cls, title, content, content_id=None, attributes=None, data=None):
        return super().__new__(cls, title, content, content_id, attributes, data)

    @classmethod
    def coerce(cls, obj, index):
        "Return obj as a ContentItem, raising MissingField if title or content is absent"
        fields = obj._asdict() if isinstance(obj, cls) else obj
        if not isinstance(fields, Mapping):
            raise TypeError('content item %d is not a mapping: %r' % (index, obj))
        for field in cls.MAPPINGS:
            if not isinstance(fields.get(field), (Mapping, type(None))):
                raise TypeError('content item %d %s is not a mapping: %r' % (index, field, fields[field]))
        for field in cls.REQUIRED:
            if fields.get(field) is None:
                raise MissingField(field, index)
        return cls(**{k: fields.get(k) for k in cls._fields})

    def pane_id(self, slug=filters.slug):
        if self.content_id is not None:
            return tostr(self.content_id)
        return slug(self.title)


class TabSpec(namedtuple('TabSpec', 'contents active style fade parent_id')):
    "Everything a render needs, as an immutable value"
    def __new__(cls, contents=(), active=0, style=TAB, fade=False, parent_id=None):
        return super().__new__(cls, tuple(contents), active, style, fade, parent_id)


def render(spec, navigation, slug=filters.slug, url=url_for, warn=warnings.warn):
    """Render the nav links followed by the panes.

    Pure: neither spec nor navigation is changed.
    """
    items = [ContentItem.coerce(item, ix) for ix, item in enumerate(spec.contents)]
    ids = [item.pane_id(slug) for item in items]
    if items and not 0 <= spec.active < len(items):
        warn('Active index %r is out of range for %d panes' % (spec.active, len(items)))
    seen = set()
    for pane_id in ids:
        if not pane_id:
            warn('Empty pane id, links to it will not open it')
        elif pane_id in seen:
            warn('Duplicate pane id %r' % pane_id)
        seen.add(pane_id)
    links = navigation_links(spec, items, ids, url)
    return safe(navigation.render(links) + render_contents(spec, items, ids))


def navigation_links(spec, items, ids, url=url_for):
    return [
        Link(
            link='#' + pane_id,
            title=item.title,
            link_attributes=link_attributes(spec, item, url),
            active=ix == spec.active,
            parent_id=spec.parent_id,
        )
        for ix, (item, pane_id) in enumerate(zip(items, ids))
    ]


def link_attributes(spec, item, url=url_for):
    attributes = {
        'role': 'tab',
        'data-toggle': spec.style,
    }
    if item.content_id is not None:
        attributes['data-tab-content-id'] = item.content_id
    if item.data:
        data = dict(item.data)
        if spec.parent_id not in (None, ''):
            for key in ACTION_KEYS:
                if key in data:
                    data[key] = action_url(url(data[key]), spec.parent_id)
        attributes.update(data)
    return attributes


def action_url(template, parent_id):
    """
    >>> action_url('/tabs/%s/load', 'p 7')
    '/tabs/p%207/load'
    """
    return template.replace('%s', filters.url(parent_id))


def render_contents(spec, items, ids):
    hidden = '<input %s>' % attrstr({
        'type': 'hidden',
        'id': 'tab-parent_id',
        'value': spec.parent_id,
    })
    panes = ''.join(
        tag('div', pane_attributes(spec, item, pane_id, ix == spec.active), safe(tostr(item.content)))
        for ix, (item, pane_id) in enumerate(zip(items, ids))
    )
    return tag('div', {'class': 'tab-content'}, safe(hidden + panes))


def pane_attributes(spec, item, pane_id, active):
    attributes = Attributes({'class': 'tab-pane', 'id': pane_id}, item.attributes)
    if spec.fade:
        attributes.addClass('fade')
    if active:
        attributes.addClass('in active' if spec.fade else 'active')
    return attributes


class Tabbable:
    """Fluent builder for a TabSpec, rendered against its own Navigation.

    The configuration calls all return the builder, so they chain:

        Tabbable(nav).as_pills(contents).active(1).with_fade().render()
    """
    def __init__(self, navigation=None, url=url_for, warn=None):
        self.links = (navigation or Navigation()).autoroute(False).with_attributes({'role': 'tablist'})
        self.spec = TabSpec()
        self.url = url
        if warn:
            self.warn = warn

    def as_tabs(self, contents=()):
        self.links = self.links.tabs()
        self.spec = self.spec._replace(style=TAB)
        return self.with_contents(contents)

    def as_pills(self, contents=()):
        self.links = self.links.pills()
        self.spec = self.spec._replace(style=PILL)
        return self.with_contents(contents)

    def with_contents(self, contents):
        self.spec = self.spec._replace(contents=tuple(contents))
        return self

    def active(self, index):
        self.spec = self.spec._replace(active=index)
        return self

    def with_fade(self):
        self.spec = self.spec._replace(fade=True)
        return self

    def with_parent_id(self, parent_id):
        self.spec = self.spec._replace(parent_id=parent_id)
        return self

    def build(self):
        return self.spec

    def render(self):
        return render(self.spec, self.links, url=self.url, warn=self.warn)

    def warn(self, s):
        warnings.warn(s, stacklevel=4)

    @classmethod
    def from_definition(cls, definition, navigation=None):
        """Configure a Tabbable from decoded JSON: either a list of items or
        an object with contents, style, active, fade and parent_id.
        """
        if not isinstance(definition, Mapping):
            definition = {'contents': definition}
        style = definition.get('style', TAB)
        if style not in STYLES:
            raise ValueError('Unknown style %r, expected one of %s' % (style, ', '.join(sorted(STYLES))))
        t = cls(navigation)
        contents = definition.get('contents', ())
        if STYLES[style] == PILL:
            t.as_pills(contents)
        else:
            t.as_tabs(contents)
        t.active(definition.get('active', 0))
        if definition.get('fade'):
            t.with_fade()
        if definition.get('parent_id') is not None:
            t.with_parent_id(definition['parent_id'])
        return t


def _option(args, name, convert=str, description='a value'):
    "Remove -name VALUE from args, returning the converted VALUE or None"
    if name not in args:
        return None
    ix = args.index(name)
    if ix + 1 >= len(args):
        raise SystemExit('%s needs %s' % (name, description))
    value = args[ix + 1]
    del args[ix:ix + 2]
    try:
        return convert(value)
    except ValueError:
        raise SystemExit('%s needs %s, got %r' % (name, description, value))


def main(args=None):
    args = sys.argv[1:] if args is None else list(args)

    opts = {
        t: '-'+t in args and not args.remove('-'+t)
        for t in ('tabs', 'pills', 'fade')
    }
    active = _option(args, '-active', int, 'an integer')
    parent_id = _option(args, '-parent')

    failed = 0
    for inp in args:
        try:
            if inp == '-':
                definition = json.load(sys.stdin)
            elif not inp.endswith('.json'):
                print('Expected .json file:', inp, file=sys.stderr)
                failed += 1
                continue
            else:
                with open(inp) as f:
                    definition = json.load(f)
            t = Tabbable.from_definition(definition)
            if opts['pills']:
                t.as_pills(t.spec.contents)
            elif opts['tabs']:
                t.as_tabs(t.spec.contents)
            if opts['fade']:
                t.with_fade()
            if active is not None:
                t.active(active)
            if parent_id is not None:
                t.with_parent_id(parent_id)
            html = t.render()
        except (OSError, ValueError, KeyError, TypeError) as e:
            print('Failed:', inp, '-', e, file=sys.stderr)
            failed += 1
            continue
        if inp == '-':
            sys.stdout.write(html)
        else:
            with open(inp[:-5] + '.html', 'w') as f:
                f.write(html)
    return 1 if failed else 0

if __name__ == '__main__':
    sys.exit(main())
