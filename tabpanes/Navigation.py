"""Bootstrap 3 nav markup: <ul class="nav nav-tabs"> and friends.

A Navigation is an immutable value. The configuration methods return a new
Navigation, and render() takes the links to draw so that one Navigation can
be shared between renders.
"""
from collections import namedtuple
from collections.abc import Mapping

from tabpanes.Attributes import Attributes
from tabpanesrt import safe, tag, tostr

TABS = 'nav-tabs'
PILLS = 'nav-pills'
NAVBAR = 'navbar-nav'


class Link(namedtuple('Link', 'link title link_attributes active parent_id disabled')):
    """A nav link descriptor.

    active=None leaves the decision to autorouting.
    """
    def __new__(cls, link, title, link_attributes=None, active=None, parent_id=None, disabled=False):
        return super().__new__(cls, link, title, link_attributes or {}, active, parent_id, disabled)

    @classmethod
    def coerce(cls, obj):
        if isinstance(obj, cls):
            return obj
        if isinstance(obj, Mapping):
            return cls(**obj)
        return cls(*obj)


class Navigation(namedtuple('Navigation', 'type attributes autorouting justified stacked current_url')):
    def __new__(cls, type=TABS, attributes=None, autorouting=True, justified=False, stacked=False, current_url=None):
        return super().__new__(cls, type, dict(attributes or {}), autorouting, justified, stacked, current_url)

    def tabs(self):
        return self._replace(type=TABS)

    def pills(self):
        return self._replace(type=PILLS)

    def navbar(self):
        return self._replace(type=NAVBAR)

    def with_attributes(self, attributes):
        merged = dict(self.attributes)
        merged.update(attributes)
        return self._replace(attributes=merged)

    def autoroute(self, flag=True):
        return self._replace(autorouting=flag)

    def justify(self, flag=True):
        return self._replace(justified=flag)

    def stack(self, flag=True):
        return self._replace(stacked=flag)

    def at(self, current_url):
        "Set the url autorouting compares links against"
        return self._replace(current_url=current_url)

    def render(self, links):
        attributes = Attributes(self.attributes, {'class': ['nav', self.type]})
        if self.justified:
            attributes.addClass('nav-justified')
        if self.stacked:
            attributes.addClass('nav-stacked')
        return tag('ul', attributes, safe(''.join(
            self.render_link(Link.coerce(link)) for link in links
        )))

    def render_link(self, link):
        classes = []
        if self.is_active(link):
            classes.append('active')
        if link.disabled:
            classes.append('disabled')
        attributes = {'href': link.link}
        attributes.update(link.link_attributes)
        attributes['href'] = link.link
        a = tag('a', attributes, safe(tostr(link.title)))
        return tag('li', {'class': classes} if classes else None, a)

    def is_active(self, link):
        if link.active is not None:
            return bool(link.active)
        return bool(self.autorouting and self.current_url is not None
                    and link.link == self.current_url)
