from django.utils.module_loading import import_string

from jaxbridge.callables.registry import CallableFunction
from jaxbridge.exceptions import ConfigurationError, RequestError
from jaxbridge.plugins import CAPABILITIES, CallableRegistryPlugin, CodeGeneratorPlugin, RequestHandlerPlugin

import logging

logger = logging.getLogger('jaxbridge.callables')

# plain functions
#
#   bridge.register('function', 'myapp.ajax.say_hello')
#   bridge.register('function', 'say_hello', 'myapp.ajax')
#   bridge.register('function', 'myapp.ajax.say_hello', { 'alias': 'hello', 'mode': "'synchronous'" })
#
# The options are either the name of the module holding the
# function, or a dict of call options; 'alias' renames the
# function on the browser side and 'module' is the same as giving
# the module name. The function itself may be given instead of its
# dotted path.
#
# Functions are called with the request's global response first,
# then the arguments sent by the browser:
#
#   def say_hello(response, name):
#       response.alert('Hello %s' % name)
#
class CallableFunctionPlugin(CallableRegistryPlugin, RequestHandlerPlugin, CodeGeneratorPlugin):
    capabilities = CAPABILITIES.CALLABLE_REGISTRY | CAPABILITIES.REQUEST_HANDLER | CAPABILITIES.CODE_GENERATOR

    def check_options(self, callable_name, options):
        if options is None:
            return {}
        if isinstance(options, str):
            return { 'module': options }
        if not isinstance(options, dict):
            raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': callable_name }))
        return dict(options)

    def register(self, callable_type, callable_name, options):
        options = dict(options)
        module = options.pop('module', None)
        alias = options.pop('alias', None)

        if callable(callable_name):
            function = callable_name
            name = function.__name__
        else:
            path = '%s.%s' % (module, callable_name) if module else callable_name
            try:
                function = import_string(path)
            except ImportError:
                raise ConfigurationError(self.translator.trans('errors.function.invalid', { 'name': path }))
            if not callable(function):
                raise ConfigurationError(self.translator.trans('errors.function.invalid', { 'name': path }))
            name = callable_name.rsplit('.', 1)[-1]

        entry = CallableFunction(function, alias or name, options)
        return self.bridge.callables.add_function(entry)

    def get_script(self):
        prefix = self.config.get_option('core.prefix.function', '')
        return '\n'.join([ entry.get_script(prefix) for entry in self.bridge.callables.functions.values() ])

    def can_process_request(self, request):
        target = request.target
        return target is not None and target.is_function()

    def process_request(self, request):
        target = request.target
        entry = self.bridge.callables.get_function(target.name)
        if entry is None:
            raise RequestError(self.translator.trans('errors.request.callable', { 'name': target.name }))

        logger.debug('calling function %s', entry.name)
        manager = request.response_manager
        manager.append(entry.call(manager.response, request.args))
        return True
