from django.core.files.uploadedfile import SimpleUploadedFile

import json
import os
import pytest
import time

from jaxbridge import Bridge
from jaxbridge.dispatcher import DISPATCH_STATES
from jaxbridge.exceptions import RequestError
from jaxbridge.upload.file import UploadedFile
from jaxbridge.upload.response import UploadResponse

def photo(name = 'My Photo.png', content = b'png data', content_type = 'image/png'):
    return SimpleUploadedFile(name, content, content_type = content_type)

def make_bridge(upload_dir, **files):
    bridge = Bridge({ 'upload': { 'default': { 'dir': upload_dir }, 'files': files } })
    bridge.register('class', 'sample_callables.Calendar')
    return bridge

def read_files(bridge, rf, **data):
    data.update({ 'jxncls': 'Calendar', 'jxnmthd': 'read_files' })
    return bridge.dispatch(rf.post('/ajax/', data))

def stored_files(upload_dir):
    found = []
    for root, dirs, files in os.walk(upload_dir):
        dirs[:] = [ d for d in dirs if d != 'tmp' ]
        found.extend(files)
    return found

#
# files sent with the call
#

def test_files_sent_with_the_call(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    result = read_files(bridge, rf, avatar = photo())
    assert result.state == DISPATCH_STATES.SUCCEEDED

    files = json.loads(result.response.get_output())['jxnrv']
    assert list(files) == [ 'avatar' ]
    uploaded = files['avatar'][0]
    assert uploaded['name'] == 'my-photo'
    assert uploaded['filename'] == 'My Photo.png'
    assert uploaded['extension'] == 'png'
    assert uploaded['type'] == 'image/png'
    assert uploaded['size'] == 8

    path = uploaded['path']
    assert os.path.dirname(os.path.dirname(path)) == upload_dir
    assert os.path.basename(path) == 'my-photo.png'
    with open(path, 'rb') as f:
        assert f.read() == b'png data'

def test_files_without_extension(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    result = read_files(bridge, rf, notes = photo('README', b'text', 'text/plain'))
    uploaded = json.loads(result.response.get_output())['jxnrv']['notes'][0]
    assert uploaded['extension'] == ''
    assert os.path.basename(uploaded['path']) == 'readme'

def test_one_batch_per_request(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    result = read_files(bridge, rf, avatar = photo(), cover = photo('cover.png'))
    files = json.loads(result.response.get_output())['jxnrv']
    assert os.path.dirname(files['avatar'][0]['path']) == os.path.dirname(files['cover'][0]['path'])

#
# two-step uploads
#

def test_two_step_upload(upload_dir, rf):
    bridge = make_bridge(upload_dir)

    first = bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() }))
    assert first.handled
    assert isinstance(first.response, UploadResponse)
    result = first.response.get_result()
    assert result['code'] == 'success'

    http = first.http_response()
    assert http['Content-Type'] == 'text/html'
    assert b'res = {' in http.content

    second = read_files(bridge, rf, jxnupl = result['upl'])
    uploaded = json.loads(second.response.get_output())['jxnrv']['avatar'][0]
    direct = json.loads(read_files(bridge, rf, avatar = photo()).response.get_output())['jxnrv']['avatar'][0]

    # the files read back from the token are described like files
    # sent with the call
    for key in ( 'name', 'extension', 'filename', 'type', 'size' ):
        assert uploaded[key] == direct[key]
    assert uploaded['name'] == 'my-photo'
    assert uploaded['extension'] == 'png'

    path = uploaded['path']
    assert os.path.dirname(os.path.dirname(path)) == upload_dir
    assert os.path.basename(path) == os.path.basename(direct['path']) == 'my-photo.png'
    assert os.path.dirname(path) != os.path.dirname(direct['path'])
    with open(path, 'rb') as f:
        assert f.read() == b'png data'

def test_token_can_be_read_again(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    manager = bridge.upload_plugin.manager
    token = bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() })).response.get_result()['upl']

    first = manager.read_from_temp_file(token)
    second = manager.read_from_temp_file(token)
    assert first == second
    assert isinstance(first['avatar'][0], UploadedFile)

def test_tampered_token(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    token = bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() })).response.get_result()['upl']

    result = read_files(bridge, rf, jxnupl = token + 'x')
    assert result.state == DISPATCH_STATES.FAILED
    assert json.loads(result.response.get_output())['jxnobj'] == [
            { 'cmd': 'alert', 'data': 'The upload token is invalid or has expired.' },
        ]

def test_expired_token(upload_dir, monkeypatch):
    bridge = make_bridge(upload_dir)
    manager = bridge.upload_plugin.manager
    token = manager.save_to_temp_file({})

    now = time.time()
    monkeypatch.setattr(time, 'time', lambda: now + 3601)
    with pytest.raises(RequestError):
        manager.read_from_temp_file(token)

def test_purged_token(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    manager = bridge.upload_plugin.manager
    token = manager.save_to_temp_file({ 'avatar': [ UploadedFile.from_temp_data({ 'name': 'a', 'path': '/tmp/a' }) ] })

    assert manager.purge_temp_files(3600) == 0
    assert manager.read_from_temp_file(token) != {}
    assert manager.purge_temp_files(0) == 1
    assert manager.read_from_temp_file(token) == {}

def test_unusable_temp_dir_is_reported_in_the_page(upload_dir, rf):
    os.makedirs(upload_dir, exist_ok = True)
    with open(os.path.join(upload_dir, 'tmp'), 'w') as f:
        f.write('not a directory')

    bridge = make_bridge(upload_dir)
    first = bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() }))
    assert first.state == DISPATCH_STATES.SUCCEEDED
    result = first.response.get_result()
    assert result['code'] == 'error'
    assert result['msg'].startswith('The upload directory ')

def test_unreadable_temp_file(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    manager = bridge.upload_plugin.manager
    token = manager.save_to_temp_file({})

    temp_dir = manager.get_temp_dir()
    records = [ f for f in os.listdir(temp_dir) if f.endswith('.json') ]
    assert len(records) == 1
    with open(os.path.join(temp_dir, records[0]), 'w') as f:
        f.write('not json')

    with pytest.raises(RequestError):
        manager.read_from_temp_file(token)

    result = read_files(bridge, rf, jxnupl = token)
    assert result.state == DISPATCH_STATES.FAILED
    assert json.loads(result.response.get_output())['jxnobj'] == [
            { 'cmd': 'alert', 'data': 'The upload data could not be read.' },
        ]

#
# checks
#

def test_type_check(upload_dir, rf):
    bridge = make_bridge(upload_dir, avatar = { 'types': [ 'image/jpeg' ] })
    result = read_files(bridge, rf, avatar = photo())
    assert result.state == DISPATCH_STATES.FAILED
    assert json.loads(result.response.get_output())['jxnobj'] == [
            { 'cmd': 'alert', 'data': 'The type of the file My Photo.png is not allowed.' },
        ]
    assert stored_files(upload_dir) == []

def test_checks_apply_to_their_field(upload_dir, rf):
    bridge = make_bridge(upload_dir, avatar = { 'types': [ 'image/jpeg' ] })
    result = read_files(bridge, rf, cover = photo())
    assert result.state == DISPATCH_STATES.SUCCEEDED

def test_nothing_is_stored_unless_every_file_passes(upload_dir, rf):
    bridge = make_bridge(upload_dir, cover = { 'max-size': 4 })
    result = read_files(bridge, rf, avatar = photo(), cover = photo('cover.png'))
    assert result.state == DISPATCH_STATES.FAILED
    assert stored_files(upload_dir) == []

def test_extension_and_size_checks(upload_dir):
    bridge = make_bridge(upload_dir, avatar = { 'extensions': [ 'PNG' ], 'min-size': 4, 'max-size': 10 })
    manager = bridge.upload_plugin.manager
    manager.validate('avatar', photo(), 'png')
    with pytest.raises(RequestError):
        manager.validate('avatar', photo('photo.gif'), 'gif')
    with pytest.raises(RequestError):
        manager.validate('avatar', photo(content = b'abc'), 'png')
    with pytest.raises(RequestError):
        manager.validate('avatar', photo(content = b'x' * 11), 'png')

def test_two_step_errors_are_reported_in_the_page(upload_dir, rf):
    bridge = make_bridge(upload_dir, avatar = { 'max-size': 4 })
    first = bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() }))
    assert first.state == DISPATCH_STATES.SUCCEEDED
    assert first.response.get_result() == { 'code': 'error', 'msg': 'The file My Photo.png is too big.' }

def test_sanitizer_cannot_escape_the_upload_dir(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    bridge.upload_plugin.sanitizer(lambda name: '../escaped')
    result = read_files(bridge, rf, avatar = photo())
    assert result.state == DISPATCH_STATES.FAILED
    assert not os.path.exists(os.path.join(os.path.dirname(upload_dir), 'escaped.png'))

def test_custom_sanitizer(upload_dir, rf):
    bridge = make_bridge(upload_dir)
    bridge.upload_plugin.sanitizer(lambda name: 'fixed')
    result = read_files(bridge, rf, avatar = photo())
    assert json.loads(result.response.get_output())['jxnrv']['avatar'][0]['name'] == 'fixed'

def test_disabled_uploads(upload_dir, rf):
    bridge = Bridge({ 'core': { 'upload': { 'enabled': False } } })
    assert bridge.upload_plugin is None
    assert not bridge.dispatch(rf.post('/ajax/', { 'avatar': photo() })).handled

#
# the upload page
#

def test_upload_response_escapes_markup():
    response = UploadResponse()
    response.set_error('</script><b>&')
    output = response.get_output()
    assert '</script><b>' not in output
    assert '\\u003C/script\\u003E\\u003Cb\\u003E\\u0026' in output

def test_upload_response_token():
    output = UploadResponse('abc:def').get_output()
    assert 'res = {"code": "success", "upl": "abc:def"};' in output
