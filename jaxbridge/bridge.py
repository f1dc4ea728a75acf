from django.conf import settings
from django.utils.module_loading import import_string

from jaxbridge.callables.registry import CallableRegistry
from jaxbridge.calls import RequestFactory
from jaxbridge.config import ConfigManager
from jaxbridge.dispatcher import RequestDispatcher
from jaxbridge.exceptions import ConfigurationError
from jaxbridge.packages import PackageManager
from jaxbridge.plugins import PRIORITY_USER
from jaxbridge.plugins.codegen import CodeGenerator
from jaxbridge.plugins.manager import PluginManager
from jaxbridge.response.response import Response
from jaxbridge.translation import Translator

import logging

logger = logging.getLogger('jaxbridge')

# the bridge
#
# Owns one of each registry and service, and is the only object an
# application needs to talk to. Build it once per process, register
# everything, then serve requests with dispatch():
#
#   bridge = Bridge({ 'core': { 'request': { 'uri': '/ajax/' } } })
#   bridge.register('class', 'myapp.ajax.Calendar')
#   bridge.register('function', 'myapp.ajax.say_hello')
#
# Registration is only allowed until the client script has been
# generated for the first time.
#
class Bridge(object):

    def __init__(self, options = None, translator = None):
        self.translator = translator or Translator()
        self.config = ConfigManager(options, self.translator)
        self.callables = CallableRegistry(self.translator)
        self.code_generator = CodeGenerator(self)
        self.plugin_manager = PluginManager(self)
        self.plugin_manager.register_core_plugins()
        self.packages = PackageManager(self)
        self.dispatcher = RequestDispatcher(self)
        self.factory = RequestFactory(self)
        self._upload_plugin = None

    #
    # registration
    #

    def register(self, callable_type, callable_name, options = None):
        return self.plugin_manager.register_callable(callable_type, callable_name, options)

    def register_plugin(self, plugin_class, name, priority = PRIORITY_USER):
        return self.plugin_manager.register_plugin(plugin_class, name, priority)

    def register_package(self, package_class, options = None):
        return self.packages.register(package_class, options)

    def package(self, package_class):
        return self.packages.get(package_class)

    def read_config_file(self, path, key = ''):
        return self.config.read_file(path, key)

    #
    # requests
    #

    # the upload handler, when uploads are enabled
    @property
    def upload_plugin(self):
        if not self.config.get_option('core.upload.enabled'):
            return None
        if self._upload_plugin is None:
            from jaxbridge.upload.plugin import UploadPlugin
            self._upload_plugin = UploadPlugin(self)
        return self._upload_plugin

    def callback(self):
        return self.dispatcher.callbacks

    def dispatch(self, http_request):
        return self.dispatcher.dispatch(http_request)

    def new_response(self, request = None):
        return Response(self, request)

    def rq(self, name = None):
        return self.factory.rq(name)

    #
    # client code
    #

    def get_js(self):
        return self.code_generator.get_js()

    def get_css(self):
        return self.code_generator.get_css()

    def get_script(self, include_js = False, include_css = False, request = None):
        return self.code_generator.get_script(include_js, include_css, request)

_bridge = None

# the process-wide bridge, built on first use by the function named
# in settings.JAXBRIDGE_FACTORY
def get_bridge():
    global _bridge
    if _bridge is None:
        factory = getattr(settings, 'JAXBRIDGE_FACTORY', None)
        if not factory:
            raise ConfigurationError('settings.JAXBRIDGE_FACTORY is not set')
        _bridge = import_string(factory)() if isinstance(factory, str) else factory()
        logger.info('built the bridge with %s', factory)
    return _bridge

# forget the process-wide bridge; the next get_bridge() builds a new one
def reset_bridge():
    global _bridge
    _bridge = None
