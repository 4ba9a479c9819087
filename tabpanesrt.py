# tabpanes runtime lib
import re, unicodedata
from collections import defaultdict
from urllib.parse import quote as _urlquote, urlsplit

# A namespace of filters.
class _Filters:
    def _add(self, fn, _alias=re.compile(r'Alias: (\w+)')):
        """Mark a function as a filter. Include Alias: name in the docstring
        to make a shortened alias.

        eg filters.slug("My Tab") -> "my-tab"
        """
        setattr(self, fn.__name__, fn)
        for alias in _alias.findall(fn.__doc__ or ''):
            setattr(self, alias, fn)
        return fn

filters = _Filters()

# Marker for safe strings
@filters._add
class safe(str): "Quoted strings are 'safe' and do not get quoted again."

# Quoting / escaping logic.
# Quote occurs through a type-switch mechanism which is faster than if isinstance chains.
_quote_safe = lambda s: s

def _quote_str(o):
    """Escape a str object. Attributes are always written with ' so > doesn't
    need to be escaped to form valid HTML.
    """
    return o.replace('&', '&amp;')\
            .replace('<', '&lt;')\
            .replace("'", '&#39;')

def _quote_other(o, q=_quote_str):
    """Escape any other object.
    Lists are space separated, everything else is str-ed
    """
    if isinstance(o, (tuple, list)):
        return q(' '.join(map(tostr, o)))
    return q(str(o))

def _mkquote(default, typesdict):
    # Build a quoting function from type switches
    d = defaultdict(lambda: default, {
        int: str,
        float: '%.16g'.__mod__,
        safe: _quote_safe,
        None.__class__: lambda o: '',
        bool: lambda o: 'true' if o else '',
    })
    d.update(typesdict)
    return lambda obj: d[obj.__class__](obj)

quote = _mkquote(_quote_other, {str: _quote_str})

def tostr(s):
    "Convert object to string with the same semantics as quote, without escaping"
    if s is None:
        return ''
    if isinstance(s, str):
        return s
    if isinstance(s, float):
        return '%.16g' % s
    return str(s)

def attrstr(attrs):
    """
    >>> attrstr({'class': ['tab-pane', 'active'], 'id': "it's"})
    "class='tab-pane active' id='it&#39;s'"
    >>> attrstr({'type': 'hidden', 'value': None})
    "type='hidden' value=''"
    """
    return ' '.join("%s='%s'" % (k, quote(v)) for k, v in attrs.items())

def tag(tagname, attrs, inner):
    """
    >>> tag('h1', {}, 'HI')
    '<h1>HI</h1>'
    >>> tag('h1', None, 'H&I')
    '<h1>H&amp;I</h1>'
    >>> tag('div', {'class': 'tab-content'}, safe('<p>A</p>'))
    "<div class='tab-content'><p>A</p></div>"
    """
    attstr = attrstr(attrs or {})
    if attstr:
        attstr = ' ' + attstr
    return safe('<%s>%s</%s>' % (tagname+attstr, quote(inner), tagname))

# Filters
@filters._add
def url(s):
    "Alias: u"
    return _urlquote(tostr(s))

@filters._add
def slug(s, separator='-'):
    """Make an id/url safe string. Alias: s

    >>> slug('My Tab')
    'my-tab'
    >>> slug('  Déjà vu_2 ')
    'deja-vu-2'
    >>> slug('Q&A @ home')
    'qa-at-home'
    >>> slug('Some Title', '_')
    'some_title'
    """
    s = unicodedata.normalize('NFKD', tostr(s)).encode('ascii', 'ignore').decode('ascii')
    sep = re.escape(separator)
    flip = '_' if separator == '-' else '-'
    s = re.sub('[%s]+' % re.escape(flip), separator, s)
    s = s.replace('@', separator + 'at' + separator)
    s = re.sub(r'[^%s\w\s]+' % sep, '', s.lower())
    s = re.sub(r'[%s\s]+' % sep, separator, s)
    return s.strip(separator)

def url_for(path, base=''):
    """Make path absolute against base. Full urls and fragments are left alone.

    >>> url_for('tabs/%s/load')
    '/tabs/%s/load'
    >>> url_for('/tabs/%s', 'http://example.com/app/')
    'http://example.com/app/tabs/%s'
    >>> url_for('https://cdn.example.com/x')
    'https://cdn.example.com/x'
    """
    path = tostr(path)
    if urlsplit(path).scheme or path.startswith(('#', '//')):
        return path
    return base.rstrip('/') + '/' + path.lstrip('/')

if __name__ == '__main__':
    import doctest
    doctest.testmod()
