from django.conf import settings

from jaxbridge import settings_jaxbridge
from jaxbridge.common import merge_dicts, lookup_path
from jaxbridge.exceptions import ConfigurationError

import copy
import json
import os

# bridge options
#
# The options are a tree of nested dicts addressed with dotted
# paths ('core.prefix.function'). Three layers are merged, each
# overriding the previous one:
#
#   1. the defaults in jaxbridge.settings_jaxbridge
#   2. settings.JAXBRIDGE_OPTIONS from the project settings
#   3. the options given to the constructor
#
# Options can be changed afterwards with set_option() or loaded
# from a json file with read_file(), but they are meant to be
# settled during startup, before the first request is served.
#
class ConfigManager(object):

    def __init__(self, options = None, translator = None):
        self.translator = translator
        self.options = copy.deepcopy(settings_jaxbridge.JAXBRIDGE_OPTIONS)
        merge_dicts(self.options, copy.deepcopy(getattr(settings, 'JAXBRIDGE_OPTIONS', {})))
        if options:
            merge_dicts(self.options, copy.deepcopy(options))

    def get_option(self, path, default = None):
        return lookup_path(self.options, path, default)

    def has_option(self, path):
        sentinel = object()
        return lookup_path(self.options, path, sentinel) is not sentinel

    # set a single option, creating intermediate levels as needed
    def set_option(self, path, value):
        keys = path.split('.')
        node = self.options
        for key in keys[:-1]:
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[keys[-1]] = value

    # merge a dict of options, optionally below a dotted prefix
    def set_options(self, options, prefix = ''):
        if not isinstance(options, dict):
            raise ConfigurationError(self._trans('errors.config.content', { 'path': prefix or '<options>' }))
        if prefix:
            current = self.get_option(prefix)
            if not isinstance(current, dict):
                self.set_option(prefix, {})
                current = self.get_option(prefix)
            merge_dicts(current, copy.deepcopy(options))
        else:
            merge_dicts(self.options, copy.deepcopy(options))

    # read options from a json file; if key is given, only that
    # section of the file is used
    def read_file(self, path, key = '', prefix = ''):
        content = self.load_file(path, key)
        self.set_options(content, prefix)
        return content

    # the content of a json options file, without merging it
    def load_file(self, path, key = ''):
        root, ext = os.path.splitext(path)
        if ext.lower() != '.json':
            raise ConfigurationError(self._trans('errors.config.extension', { 'path': path }))
        try:
            with open(path, 'r') as f:
                content = json.load(f)
        except (IOError, OSError, ValueError):
            raise ConfigurationError(self._trans('errors.config.file', { 'path': path }))

        if key:
            content = lookup_path(content, key)
        if not isinstance(content, dict):
            raise ConfigurationError(self._trans('errors.config.content', { 'path': path }))
        return content

    def _trans(self, key, params):
        if self.translator is None:
            return key
        return self.translator.trans(key, params)
