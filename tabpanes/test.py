"""Tests -- run with pytest, or from command line python -mtabpanes.test [-u]
(The -u will update the expected html)
"""

import os, sys, json, glob, io
from contextlib import redirect_stdout

import bs4
import pytest

import tabpanes
import tabpanesrt
from tabpanes import Tabbable, TabSpec, ContentItem, MissingField, Navigation, Link, Attributes
from tabpanes.Tabbable import main, render

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CASES = os.path.join(ROOT, 'tests/cases/*.json')
OUT = os.path.join(ROOT, 'tests/out/')
EXPECT = os.path.join(ROOT, 'tests/expect/')

ONE_TWO = [
    {'title': 'One', 'content': '<p>A</p>'},
    {'title': 'Two', 'content': '<p>B</p>'},
]

def soup(html):
    return bs4.BeautifulSoup(html, 'lxml')

def panes(html):
    return soup(html).select('div.tab-content > div')

def anchors(html):
    return soup(html).select('ul.nav > li > a')

# --------- golden files
class Case:
    def __init__(self, path):
        self.path = path
        self.file = os.path.split(path)[1]
        base = os.path.splitext(self.file)[0]
        self.outbase = os.path.join(OUT, base)
        self.expectbase = os.path.join(EXPECT, base)

    def __repr__(self):
        return self.file

    def render(self):
        with open(self.path) as f:
            definition = json.load(f)
        return Tabbable.from_definition(definition).render().rstrip() + '\n'

    def out(self, suffix, output, update=False):
        os.makedirs(OUT, exist_ok=True)
        outf = self.outbase + suffix
        with open(outf, 'w') as f:
            f.write(output)
        expectf = self.expectbase + suffix
        expect = read(expectf)
        if output != expect:
            if not update:
                raise AssertionError("%s != %s" % (outf, expectf))
            with open(expectf, 'w') as f:
                f.write(output)
            print("Wrote", expectf)
        return outf

def read(filename, default=''):
    try:
        with open(filename) as f:
            return f.read()
    except OSError:
        return default

@pytest.mark.parametrize('case', [Case(f) for f in sorted(glob.glob(CASES))], ids=repr)
def test_golden(case):
    case.out('.html', case.render())

# --------- rendering
def test_end_to_end():
    html = Tabbable().as_tabs(ONE_TWO).render()
    a = anchors(html)
    assert [x['href'] for x in a] == ['#one', '#two']
    assert a[0].parent['class'] == ['active']
    assert not a[1].parent.has_attr('class')
    p = panes(html)
    assert [x['id'] for x in p] == ['one', 'two']
    assert p[0]['class'] == ['tab-pane', 'active']
    assert p[1]['class'] == ['tab-pane']
    assert p[0].decode_contents() == '<p>A</p>'

def test_links_and_panes_align():
    contents = [{'title': 'Tab %d' % i, 'content': str(i)} for i in range(5)]
    html = Tabbable().as_tabs(contents).render()
    a, p = anchors(html), panes(html)
    assert len(a) == len(p) == 5
    assert [x['href'][1:] for x in a] == [x['id'] for x in p]
    assert [x.text for x in p] == ['0', '1', '2', '3', '4']

def test_active_index():
    html = Tabbable().as_tabs(ONE_TWO).active(1).render()
    assert [x.parent.get('class') for x in anchors(html)] == [None, ['active']]
    assert [x['class'] for x in panes(html)] == [['tab-pane'], ['tab-pane', 'active']]

@pytest.mark.parametrize('index', [2, 10, -1])
def test_active_out_of_range(index):
    t = Tabbable().as_tabs(ONE_TWO).active(index)
    with pytest.warns(UserWarning, match='out of range'):
        html = t.render()
    assert 'active' not in html
    assert len(panes(html)) == 2

def test_injected_warn():
    got = []
    html = Tabbable(warn=got.append).as_tabs(ONE_TWO).active(5).render()
    assert got == ['Active index 5 is out of range for 2 panes']
    assert len(panes(html)) == 2

def test_duplicate_ids_warn():
    got = []
    Tabbable(warn=got.append).as_tabs([
        {'title': 'Same', 'content': 'a'},
        {'title': 'same', 'content': 'b'},
    ]).render()
    assert got == ["Duplicate pane id 'same'"]

def test_fade():
    html = Tabbable().as_tabs(ONE_TWO).with_fade().render()
    p = panes(html)
    assert set(p[0]['class']) == {'tab-pane', 'fade', 'in', 'active'}
    assert p[1]['class'] == ['tab-pane', 'fade']

def test_content_id():
    html = Tabbable().as_tabs([
        {'title': 'My Tab', 'content': 'x', 'content_id': 'custom'},
        {'title': 'My Tab 2', 'content': 'y'},
    ]).render()
    a, p = anchors(html), panes(html)
    assert p[0]['id'] == 'custom'
    assert a[0]['data-tab-content-id'] == 'custom'
    assert a[0]['href'] == '#custom'
    assert p[1]['id'] == 'my-tab-2'
    assert not a[1].has_attr('data-tab-content-id')

def test_slug_id():
    html = Tabbable().as_tabs([{'title': 'My Tab', 'content': 'x'}]).render()
    assert panes(html)[0]['id'] == 'my-tab'
    assert anchors(html)[0]['href'] == '#my-tab'

def test_pills_vs_tabs():
    t = Tabbable().as_pills(ONE_TWO)
    pills = t.render()
    tabs = t.as_tabs(ONE_TWO).render()
    assert [x['data-toggle'] for x in anchors(pills)] == ['pill', 'pill']
    assert [x['data-toggle'] for x in anchors(tabs)] == ['tab', 'tab']
    assert soup(pills).ul['class'] == ['nav', 'nav-pills']
    assert soup(tabs).ul['class'] == ['nav', 'nav-tabs']
    assert pills.replace('pill', 'tab') == tabs

def test_with_contents_keeps_style():
    html = Tabbable().as_pills([]).with_contents(ONE_TWO).render()
    assert [x['data-toggle'] for x in anchors(html)] == ['pill', 'pill']

def test_render_is_repeatable():
    t = Tabbable().as_tabs(ONE_TWO).with_parent_id('p1')
    links = t.links
    assert t.render() == t.render()
    assert t.links is links

def test_parent_id_hidden_field():
    empty = soup(Tabbable().as_tabs(ONE_TWO).render()).find('input')
    assert empty['id'] == 'tab-parent_id'
    assert empty['value'] == ''
    set_ = soup(Tabbable().as_tabs(ONE_TWO).with_parent_id(42).render()).find('input')
    assert set_['value'] == '42'

def test_action_rewritten_with_parent_id():
    contents = [{'title': 'One', 'content': '', 'data': {'data-action': 'tabs/%s/one', 'data-x': 'y'}}]
    html = Tabbable().as_tabs(contents).with_parent_id('p 1').render()
    a = anchors(html)[0]
    assert a['data-action'] == '/tabs/p%201/one'
    assert a['data-x'] == 'y'
    assert contents[0]['data']['data-action'] == 'tabs/%s/one'

def test_action_untouched_without_parent_id():
    contents = [{'title': 'One', 'content': '', 'data': {'action': 'tabs/%s/one'}}]
    html = Tabbable().as_tabs(contents).render()
    assert anchors(html)[0]['action'] == 'tabs/%s/one'

def test_injected_url():
    contents = [{'title': 'One', 'content': '', 'data': {'action': 'x/%s'}}]
    t = Tabbable(url=lambda p: tabpanesrt.url_for(p, 'http://example.com/')).as_tabs(contents)
    html = t.with_parent_id('7').render()
    assert anchors(html)[0]['action'] == 'http://example.com/x/7'

def test_data_wins_over_generated_link_attributes():
    contents = [{'title': 'One', 'content': '', 'data': {'role': 'button'}}]
    assert anchors(Tabbable().as_tabs(contents).render())[0]['role'] == 'button'

def test_explicit_pane_attributes():
    html = Tabbable().as_tabs([{
        'title': 'One', 'content': '',
        'attributes': {'id': 'nope', 'class': 'big', 'style': 'color: red'},
    }]).render()
    p = panes(html)[0]
    assert p['id'] == 'one'
    assert p['class'] == ['big', 'tab-pane', 'active']
    assert p['style'] == 'color: red'

def test_attribute_values_are_quoted():
    html = Tabbable().as_tabs([{
        'title': 'One', 'content': '', 'attributes': {'title': "it's <b>"},
    }]).render()
    assert "title='it&#39;s &lt;b>'" in html
    assert panes(html)[0]['title'] == "it's <b>"

def test_content_item_instances():
    html = Tabbable().as_tabs([ContentItem('One', 'a'), ContentItem('Two', 'b', content_id='t')]).render()
    assert [x['id'] for x in panes(html)] == ['one', 't']

@pytest.mark.parametrize('item, field', [
    ({'content': 'x'}, 'title'),
    ({'title': 'x'}, 'content'),
    ({'title': None, 'content': 'x'}, 'title'),
])
def test_missing_field(item, field):
    t = Tabbable().as_tabs([{'title': 'ok', 'content': 'ok'}, item])
    with pytest.raises(MissingField) as e:
        t.render()
    assert e.value.field == field
    assert e.value.index == 1
    assert str(e.value) == 'content item 1 has no %r' % field

def test_render_function_is_pure():
    spec = TabSpec(ONE_TWO, active=1, style='pill', fade=True)
    nav = Navigation().pills()
    assert render(spec, nav) == render(spec, nav)
    assert spec.contents == tuple(ONE_TWO)
    assert nav.attributes == {}

def test_build():
    spec = Tabbable().as_pills(ONE_TWO).active(1).with_fade().with_parent_id('p').build()
    assert spec == TabSpec(ONE_TWO, 1, 'pill', True, 'p')

# --------- definitions
def test_from_definition_list():
    t = Tabbable.from_definition(ONE_TWO)
    assert t.build() == TabSpec(ONE_TWO)

def test_from_definition_bad_style():
    with pytest.raises(ValueError):
        Tabbable.from_definition({'style': 'accordion', 'contents': []})

def test_load(tmp_path):
    path = tmp_path / 'tabs.json'
    path.write_text(json.dumps({'style': 'pill', 'active': 1, 'contents': ONE_TWO}))
    t = tabpanes.load(str(tmp_path / 'tabs'))
    assert t.build().style == 'pill'
    assert t.build().active == 1
    assert tabpanes.load(str(path)).render() == t.render()

def test_load_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        tabpanes.load(str(tmp_path / 'nothing'))

def test_main_writes_html(tmp_path):
    path = tmp_path / 'tabs.json'
    path.write_text(json.dumps(ONE_TWO))
    assert main(['-pills', '-fade', '-active', '1', '-parent', 'x', str(path)]) == 0
    html = (tmp_path / 'tabs.html').read_text()
    assert [x['data-toggle'] for x in anchors(html)] == ['pill', 'pill']
    assert set(panes(html)[1]['class']) == {'tab-pane', 'fade', 'in', 'active'}
    assert soup(html).find('input')['value'] == 'x'

def test_main_stdin(monkeypatch):
    monkeypatch.setattr(sys, 'stdin', io.StringIO(json.dumps(ONE_TWO)))
    buf = io.StringIO()
    with redirect_stdout(buf):
        assert main(['-']) == 0
    assert buf.getvalue() == Tabbable().as_tabs(ONE_TWO).render()

def test_main_reports_failures(tmp_path, capsys):
    bad = tmp_path / 'bad.json'
    bad.write_text(json.dumps([{'title': 'no content'}]))
    assert main([str(bad), str(tmp_path / 'tabs.txt')]) == 1
    err = capsys.readouterr().err
    assert 'content item 0 has no' in err
    assert 'Expected .json file' in err
    assert not (tmp_path / 'bad.html').exists()

def test_main_reports_bad_attributes(tmp_path, capsys):
    bad = tmp_path / 'bad.json'
    bad.write_text(json.dumps([{'title': 'A', 'content': 'x', 'attributes': ['x']}]))
    good = tmp_path / 'good.json'
    good.write_text(json.dumps(ONE_TWO))
    assert main([str(bad), str(good)]) == 1
    assert 'content item 0 attributes is not a mapping' in capsys.readouterr().err
    assert not (tmp_path / 'bad.html').exists()
    assert (tmp_path / 'good.html').exists()

@pytest.mark.parametrize('field', ['attributes', 'data'])
def test_non_mapping_fields(field):
    t = Tabbable().as_tabs([{'title': 'A', 'content': 'x', field: 'nope'}])
    with pytest.raises(TypeError, match='content item 0 %s is not a mapping' % field):
        t.render()

def test_main_bad_active(tmp_path):
    path = tmp_path / 'tabs.json'
    path.write_text(json.dumps(ONE_TWO))
    with pytest.raises(SystemExit) as e:
        main(['-active', 'x', str(path)])
    assert str(e.value) == "-active needs an integer, got 'x'"
    assert not (tmp_path / 'tabs.html').exists()

def test_empty_pane_id_warns():
    got = []
    html = Tabbable(warn=got.append).as_tabs([{'title': '!!', 'content': 'x'}]).render()
    assert got == ['Empty pane id, links to it will not open it']
    assert len(panes(html)) == 1

# --------- navigation
def test_navigation_is_immutable():
    nav = Navigation()
    pills = nav.pills().with_attributes({'role': 'tablist'})
    assert nav.type == tabpanes.TABS
    assert nav.attributes == {}
    assert pills.type == tabpanes.PILLS
    assert pills.attributes == {'role': 'tablist'}

def test_navigation_render():
    html = Navigation().justify().stack().render([
        Link('#a', 'A', {'role': 'tab'}, active=True),
        {'link': '#b', 'title': 'B', 'disabled': True},
        ('#c', 'C', {'href': 'ignored'}),
    ])
    ul = soup(html).ul
    assert ul['class'] == ['nav', 'nav-tabs', 'nav-justified', 'nav-stacked']
    li = ul.find_all('li')
    assert li[0]['class'] == ['active']
    assert li[1]['class'] == ['disabled']
    assert [x.a['href'] for x in li] == ['#a', '#b', '#c']

def test_navigation_autoroute():
    links = [Link('/a', 'A'), Link('/b', 'B'), Link('/c', 'C', active=False)]
    html = Navigation().at('/b').render(links)
    assert [x.get('class') for x in soup(html).find_all('li')] == [None, ['active'], None]
    html = Navigation().at('/b').autoroute(False).render(links)
    assert 'active' not in html

def test_tabbable_disables_autoroute():
    t = Tabbable(Navigation().at('#two').navbar())
    assert t.links.autorouting is False
    assert t.links.attributes == {'role': 'tablist'}
    html = t.as_tabs(ONE_TWO).render()
    assert soup(html).ul['class'] == ['nav', 'nav-tabs']
    assert [x.parent.get('class') for x in anchors(html)] == [['active'], None]

# --------- runtime
def test_attributes():
    a = Attributes({'class': ['b', 'c'], 'id': 'x'}, {'class': 'a b', 'role': 'tab'})
    assert str(a) == "class='a b c' role='tab' id='x'"
    a.addClass('c d')
    assert str(a) == "class='a b c d' role='tab' id='x'"

def test_quote():
    q = tabpanesrt.quote
    assert q(None) == ''
    assert q(True) == 'true'
    assert q(False) == ''
    assert q(3) == '3'
    assert q(0.5) == '0.5'
    assert q(['a', 1]) == 'a 1'
    assert q("<a href='x'>&") == "&lt;a href=&#39;x&#39;>&amp;"
    assert q(tabpanesrt.safe('<b>')) == '<b>'

def test_filters():
    f = tabpanesrt.filters
    assert f.slug('My Tab') == f.s('My Tab') == 'my-tab'
    assert f.u('a b') == 'a%20b'
    assert f.safe('x') == 'x'

def test_slug():
    slug = tabpanesrt.slug
    assert slug('Hello, World!') == 'hello-world'
    assert slug('--a--b--') == 'a-b'
    assert slug('Über Größe') == 'uber-groe'
    assert slug('') == ''
    assert slug(2024) == '2024'

def test_url_for():
    assert tabpanesrt.url_for('#frag') == '#frag'
    assert tabpanesrt.url_for('//cdn.example.com/x') == '//cdn.example.com/x'
    assert tabpanesrt.url_for('a/b', 'http://h') == 'http://h/a/b'


if __name__ == '__main__':
    print("Running tests... (pass -u to update)")
    args = sys.argv[1:]
    update = '-u' in args
    if update: args.remove('-u')
    fails = []
    for f in sorted(glob.glob(CASES)):
        case = Case(f)
        if args and case.file not in args:
            continue
        try:
            case.out('.html', case.render(), update)
        except AssertionError as e:
            print('FAILURE:', e)
            fails.append(case.path)
        except Exception:
            import traceback
            traceback.print_exc()
            fails.append(case.path)
    for f in fails:
        print(f)
    sys.exit(1 if fails else 0)
