from jaxbridge.exceptions import ConfigurationError
from jaxbridge.plugins import CAPABILITIES, PRIORITY_USER

import logging

logger = logging.getLogger('jaxbridge.plugins')

# one registered plugin
#
# Records are created once, during startup, and never change. A
# plugin that declares several capabilities gets one record that
# is filed under each matching category.
#
class PluginRecord(object):

    def __init__(self, plugin_class, name, priority, capabilities):
        self.plugin_class = plugin_class
        self.class_name = '%s.%s' % (plugin_class.__module__, plugin_class.__name__)
        self.name = name
        self.priority = priority
        self.capabilities = capabilities

    def has_capability(self, capability):
        return bool(self.capabilities & capability)

    # a debugging string cast
    def __repr__(self):
        return '<PluginRecord %s %s (%d)>' % (self.name, self.class_name, self.priority)

# the plugin registry
#
# Plugins are classified by the capabilities their class declares
# (see jaxbridge.plugins) and filed under each matching category,
# keyed by plugin name:
#
#   code generators     handed to the CodeGenerator, which orders them
#                       by priority then registration order
#   registry plugins    looked up by callable type in register_callable()
#   request handlers    asked in registration order whether they own
#                       an inbound request
#   response plugins    looked up by name from a Response
#
# Registering the same name twice in a category replaces the first
# registration in that category only.
#
# Instances are built lazily. Registry plugins, request handlers and
# code generators are process-wide and built once; response plugins
# carry per-request state, so they are built once per request (or
# once per response, for responses made outside of a request).
#
class PluginManager(object):

    def __init__(self, bridge):
        self.bridge = bridge
        self.translator = bridge.translator
        self.code_generator = bridge.code_generator

        self.registry_plugins = {}
        self.request_handlers = {}
        self.response_plugins = {}
        self._instances = {}

    # register a plugin class under a name
    #
    # Below is a table for priorities and their description:
    #   0 to 999        plugins that are part of or extensions to the core
    #   1000 to 8999    user plugins, which typically don't care about order
    #   9000 to 9999    plugins that need to be last or near the end
    #
    def register_plugin(self, plugin_class, name, priority = PRIORITY_USER):
        if isinstance(plugin_class, str):
            from django.utils.module_loading import import_string
            plugin_class = import_string(plugin_class)

        capabilities = getattr(plugin_class, 'capabilities', 0) if isinstance(plugin_class, type) else 0
        if not isinstance(capabilities, int) or not capabilities:
            raise ConfigurationError(self.translator.trans('errors.register.invalid', { 'name': repr(plugin_class) }))

        record = PluginRecord(plugin_class, name, priority, capabilities)
        if record.has_capability(CAPABILITIES.CODE_GENERATOR):
            self.code_generator.add_generator(record)
        if record.has_capability(CAPABILITIES.CALLABLE_REGISTRY):
            self.registry_plugins[name] = record
        if record.has_capability(CAPABILITIES.REQUEST_HANDLER):
            self.request_handlers[name] = record
        if record.has_capability(CAPABILITIES.RESPONSE_PLUGIN):
            self.response_plugins[name] = record

        logger.debug('registered plugin %r', record)
        return record

    # the core plugins every bridge starts with
    def register_core_plugins(self):
        from jaxbridge.callables.klass import CallableClassPlugin
        from jaxbridge.callables.function import CallableFunctionPlugin
        from jaxbridge.callables.directory import CallableDirPlugin
        from jaxbridge.response.jquery import JQueryPlugin
        from jaxbridge.response.databag import DataBagPlugin
        from jaxbridge.response.dialog import DialogPlugin

        # request plugins
        self.register_plugin(CallableClassPlugin, 'class', 101)
        self.register_plugin(CallableFunctionPlugin, 'function', 102)
        self.register_plugin(CallableDirPlugin, 'dir', 103)

        # response plugins
        self.register_plugin(JQueryPlugin, JQueryPlugin.NAME, 700)
        self.register_plugin(DataBagPlugin, DataBagPlugin.NAME, 700)
        self.register_plugin(DialogPlugin, DialogPlugin.NAME, 750)

    # the process-wide instance of a registered plugin
    def get_instance(self, record):
        key = (record.plugin_class, record.name)
        if key not in self._instances:
            plugin = record.plugin_class(self.bridge)
            plugin.name = record.name
            self._instances[key] = plugin
        return self._instances[key]

    # request handlers, in registration order
    def get_request_handlers(self):
        return [ self.get_instance(record) for record in self.request_handlers.values() ]

    # find a response plugin by name and attach it to the response
    #
    # NOTE: returns None for unknown names; response plugin access is
    # often speculative so callers treat this as a soft failure
    #
    def get_response_plugin(self, name, response = None):
        record = self.response_plugins.get(name)
        if record is None:
            return None

        if response is None:
            return self.get_instance(record)

        # one instance per request, so that plugin state such as the
        # data bags is shared by every response built for the request
        if response.request is not None:
            cache = response.request.plugin_instances
        else:
            cache = response.plugin_instances
        key = (record.plugin_class, record.name)
        if key not in cache:
            plugin = record.plugin_class(self.bridge, response.request)
            plugin.name = record.name
            cache[key] = plugin
        plugin = cache[key]
        plugin.set_response(response)
        return plugin

    # register a function, a class or a directory of classes
    #
    # The registry plugin filed under the callable type checks the
    # options and performs the registration.
    #
    def register_callable(self, callable_type, callable_name, options = None):
        record = self.registry_plugins.get(callable_type)
        if record is None:
            raise ConfigurationError(self.translator.trans('errors.register.plugin', {
                    'name': callable_type,
                    'callable': callable_name,
                }))
        plugin = self.get_instance(record)
        return plugin.register(callable_type, callable_name, plugin.check_options(callable_name, options))
