from jaxbridge.common import Enumeration

# plugin base classes
#
# A plugin is any class registered with the PluginManager. What
# the manager does with it depends on the capabilities the class
# declares in its `capabilities` attribute, a bitwise OR of the
# values below:
#
#   CODE_GENERATOR      contributes CSS/JS/script fragments to the
#                       client bundle (see CodeGenerator)
#   CALLABLE_REGISTRY   accepts registrations of a callable type
#                       ('function', 'class', 'dir')
#   REQUEST_HANDLER     may claim and process an inbound request
#   RESPONSE_PLUGIN     produces namespaced response commands and
#                       is reachable by name from a Response
#
# The mixins below each declare their own capability; a class that
# combines several of them MUST declare the union explicitly, e.g.
#
#   class MyPlugin(ResponsePlugin, CodeGeneratorPlugin):
#       capabilities = CAPABILITIES.RESPONSE_PLUGIN | CAPABILITIES.CODE_GENERATOR
#
# A class declaring no capability is refused at registration.
#
CAPABILITIES = Enumeration(
        (1, 'CODE_GENERATOR', 'code generator'),
        (2, 'CALLABLE_REGISTRY', 'callable registry provider'),
        (4, 'REQUEST_HANDLER', 'request handler'),
        (8, 'RESPONSE_PLUGIN', 'response command producer'),
    )

# priority bands; lower priorities generate their code first
#
#   0 to 999        plugins that are part of or extend the core
#   1000 to 8999    user plugins, which typically don't care about order
#   9000 to 9999    plugins that need to be last or near the end
#
PRIORITY_CORE = 0
PRIORITY_USER = 1000
PRIORITY_TERMINAL = 9000

# the base of every plugin
#
# Plugins are constructed by the PluginManager with the bridge they
# belong to and, for plugins created while serving a request, the
# request context. Process-wide instances get request = None and
# must take the request as a parameter wherever they need one.
#
class Plugin(object):
    capabilities = 0

    # the registered name; set by the PluginManager
    name = None

    def __init__(self, bridge, request = None):
        self.bridge = bridge
        self.request = request

    @property
    def config(self):
        return self.bridge.config

    @property
    def translator(self):
        return self.bridge.translator

# contributes to the generated client code; every hook returns a
# (possibly empty) string
#
class CodeGeneratorPlugin(Plugin):
    capabilities = CAPABILITIES.CODE_GENERATOR

    # CSS links or inline styles to add in the page head
    def get_css(self):
        return ''

    # script tags for javascript libraries
    def get_js(self):
        return ''

    # javascript executed as soon as the bundle is loaded
    def get_script(self):
        return ''

    # javascript executed once the page is ready
    def get_ready_script(self):
        return ''

    # called once the script block holding this generator's code
    # has been rendered
    def script_rendered(self):
        pass

# accepts registrations of one or more callable types
#
class CallableRegistryPlugin(Plugin):
    capabilities = CAPABILITIES.CALLABLE_REGISTRY

    # check the provided options and normalize them into a dict;
    # raise ConfigurationError if they can't be used
    def check_options(self, callable_name, options):
        raise NotImplementedError()

    # register a callable with already-checked options
    def register(self, callable_type, callable_name, options):
        raise NotImplementedError()

# may claim and process an inbound request
#
# can_process_request() inspects the request context and answers
# whether this plugin owns the request; process_request() is only
# called on the plugin that answered True.
#
class RequestHandlerPlugin(Plugin):
    capabilities = CAPABILITIES.REQUEST_HANDLER

    def can_process_request(self, request):
        raise NotImplementedError()

    def process_request(self, request):
        raise NotImplementedError()

# writes namespaced commands into a response
#
# The PluginManager attaches the response before handing out the
# plugin; commands added through add_command() are stamped with the
# plugin name so the client can route them to the matching handler.
#
class ResponsePlugin(Plugin):
    capabilities = CAPABILITIES.RESPONSE_PLUGIN

    response = None

    def set_response(self, response):
        self.response = response

    def add_command(self, attributes, data):
        return self.response.add_plugin_command(self, attributes, data)
