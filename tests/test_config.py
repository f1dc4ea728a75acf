from django.test import override_settings

import json
import pytest

from jaxbridge.config import ConfigManager
from jaxbridge.exceptions import ConfigurationError
from jaxbridge.translation import Translator, collect_messages

def test_defaults():
    config = ConfigManager()
    assert config.get_option('core.prefix.function') == 'jaxon_'
    assert config.get_option('core.prefix.class') == 'Jaxon'
    assert config.get_option('core.upload.enabled') is True
    assert config.get_option('upload.default.token-lifetime') == 3600
    assert config.get_option('core.nothing.here', 'default') == 'default'

def test_settings_then_constructor_options():
    with override_settings(JAXBRIDGE_OPTIONS = { 'core': { 'prefix': { 'function': 'app_' }, 'debug': { 'on': True } } }):
        config = ConfigManager({ 'core': { 'debug': { 'on': False } } })
    assert config.get_option('core.prefix.function') == 'app_'
    assert config.get_option('core.debug.on') is False
    # the rest of the tree is untouched
    assert config.get_option('core.prefix.class') == 'Jaxon'

def test_options_do_not_leak_between_instances():
    first = ConfigManager()
    first.set_option('core.prefix.class', 'Changed')
    assert ConfigManager().get_option('core.prefix.class') == 'Jaxon'

def test_set_option_creates_levels():
    config = ConfigManager()
    config.set_option('upload.files.avatar.max-size', 1024)
    assert config.get_option('upload.files.avatar.max-size') == 1024
    assert config.has_option('upload.files.avatar')
    assert not config.has_option('upload.files.cover')

def test_set_options_with_prefix():
    config = ConfigManager()
    config.set_options({ 'types': [ 'image/png' ] }, 'upload.files.avatar')
    assert config.get_option('upload.files.avatar.types') == [ 'image/png' ]
    with pytest.raises(ConfigurationError):
        config.set_options([ 'not', 'a', 'dict' ])

def test_read_file(tmp_path):
    path = tmp_path / 'options.json'
    path.write_text(json.dumps({ 'app': { 'core': { 'request': { 'uri': '/ajax/' } } } }))

    config = ConfigManager()
    config.read_file(str(path), 'app')
    assert config.get_option('core.request.uri') == '/ajax/'

def test_read_file_errors(tmp_path):
    config = ConfigManager(translator = Translator())

    yaml_path = tmp_path / 'options.yaml'
    yaml_path.write_text('core: {}')
    with pytest.raises(ConfigurationError) as excinfo:
        config.read_file(str(yaml_path))
    assert 'unsupported extension' in str(excinfo.value)

    with pytest.raises(ConfigurationError):
        config.read_file(str(tmp_path / 'missing.json'))

    broken = tmp_path / 'broken.json'
    broken.write_text('{ not json')
    with pytest.raises(ConfigurationError):
        config.read_file(str(broken))

    a_list = tmp_path / 'list.json'
    a_list.write_text('[ 1, 2 ]')
    with pytest.raises(ConfigurationError) as excinfo:
        config.read_file(str(a_list))
    assert 'must contain a json object' in str(excinfo.value)

def test_translator():
    translator = Translator()
    assert translator.trans('errors.register.duplicate', { 'name': 'Calendar.show' }) == 'A callable named Calendar.show is already registered.'
    assert translator.trans('errors.no.such.key') == 'errors.no.such.key'
    assert translator.trans('errors.register') == 'errors.register'

def test_message_modules_are_merged():
    with override_settings(JAXBRIDGE_MESSAGES = ( 'jaxbridge.messages', 'custom_messages' )):
        messages = collect_messages()
    assert messages['errors']['response']['exception'] == 'Something went wrong.'
    assert messages['errors']['request']['args'] == 'The request arguments are invalid.'

def test_logging_settings():
    from jaxbridge.settings_logging import LOGGING
    assert LOGGING['loggers']['jaxbridge']['handlers'] == [ 'console' ]
    assert LOGGING['loggers']['django.request']['handlers'] == [ 'mail_admins' ]
