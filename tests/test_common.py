import pytest

from jaxbridge.common import Enumeration, find_modules, jaxbridge_slugify, lookup_path, merge_dicts

COLORS = Enumeration(
        (1, 'RED', 'bright red'),
        (2, 'GREEN'),
    )

def test_enumeration_attributes():
    assert COLORS.RED == 1
    assert COLORS.GREEN == 2
    with pytest.raises(AttributeError):
        COLORS.BLUE

def test_enumeration_labels():
    assert COLORS.get_label(1) == 'RED'
    assert COLORS.get_display(1) == 'bright red'
    assert COLORS.get_display(2) == 'GREEN'
    assert COLORS.get_label(3) is None
    assert COLORS.get_value('GREEN') == 2
    assert COLORS.get_value(2) == 2
    assert COLORS.values() == [ 1, 2 ]
    assert 'RED' in COLORS
    assert len(COLORS) == 2

def test_enumeration_is_read_only():
    with pytest.raises(TypeError):
        COLORS[0] = (3, 'BLUE')

def test_merge_dicts_is_recursive():
    merged = merge_dicts({ 'a': { 'b': 1, 'c': 2 }, 'd': 3 }, { 'a': { 'c': 4 }, 'e': 5 })
    assert merged == { 'a': { 'b': 1, 'c': 4 }, 'd': 3, 'e': 5 }

def test_lookup_path():
    tree = { 'core': { 'upload': { 'enabled': False } } }
    assert lookup_path(tree, 'core.upload.enabled') is False
    assert lookup_path(tree, 'core.missing', 'x') == 'x'
    assert lookup_path(tree, 'core.upload.enabled.deeper') is None

def test_slugify_replaces_slashes():
    assert jaxbridge_slugify('My Photo/2024') == 'my-photo-2024'
    assert jaxbridge_slugify('../etc/passwd') == 'etc-passwd'

def test_find_modules(tmp_path):
    (tmp_path / 'b.py').write_text('')
    (tmp_path / 'a.py').write_text('')
    (tmp_path / '__init__.py').write_text('')
    (tmp_path / 'notes.txt').write_text('')
    (tmp_path / 'sub').mkdir()
    (tmp_path / 'sub' / 'c.py').write_text('')

    flat = find_modules(str(tmp_path))
    assert [ (subdirs, name) for subdirs, name, path in flat ] == [ ([], 'a'), ([], 'b') ]

    deep = find_modules(str(tmp_path), recursive = True)
    assert [ (subdirs, name) for subdirs, name, path in deep ] == [ ([], 'a'), ([], 'b'), ([ 'sub' ], 'c') ]
    assert deep[2][2] == str(tmp_path / 'sub' / 'c.py')
