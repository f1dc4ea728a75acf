from django.utils.module_loading import import_string

from jaxbridge.callables.registry import CallableObject
from jaxbridge.exceptions import ConfigurationError, RequestError
from jaxbridge.plugins import CAPABILITIES, CallableRegistryPlugin, CodeGeneratorPlugin, RequestHandlerPlugin

import inspect
import logging

logger = logging.getLogger('jaxbridge.callables')

# classes
#
#   bridge.register('class', 'myapp.ajax.Calendar')
#   bridge.register('class', 'myapp.ajax.Calendar', 'App.Ui')
#   bridge.register('class', 'myapp.ajax.Calendar', {
#           'classpath': 'App.Ui',
#           'excluded': [ 'helper' ],
#           'functions': {
#               '*': { 'mode': "'asynchronous'" },
#               'save': { 'mode': "'synchronous'" },
#           },
#       })
#
# A string option is the classpath. The class itself may be given
# instead of its dotted path.
#
# This plugin serves the requests of every registered class,
# including those found by the 'dir' plugin.
#
class CallableClassPlugin(CallableRegistryPlugin, RequestHandlerPlugin, CodeGeneratorPlugin):
    capabilities = CAPABILITIES.CALLABLE_REGISTRY | CAPABILITIES.REQUEST_HANDLER | CAPABILITIES.CODE_GENERATOR

    kind = 'class'

    def check_options(self, callable_name, options):
        if options is None:
            options = {}
        elif isinstance(options, str):
            options = { 'classpath': options }
        elif isinstance(options, dict):
            options = dict(options)
        else:
            raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': callable_name }))

        excluded = options.get('excluded', [])
        if isinstance(excluded, str):
            excluded = [ excluded ]
        if not isinstance(excluded, (list, tuple, set)):
            raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': callable_name }))
        options['excluded'] = list(excluded)

        functions = options.get('functions', {})
        if not isinstance(functions, dict) or not all([ isinstance(v, dict) for v in functions.values() ]):
            raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': callable_name }))
        options['functions'] = functions
        return options

    def get_class(self, callable_name):
        klass = callable_name
        if isinstance(callable_name, str):
            try:
                klass = import_string(callable_name)
            except ImportError:
                klass = None
        if not inspect.isclass(klass):
            raise ConfigurationError(self.translator.trans('errors.class.invalid', { 'name': callable_name }))
        return klass

    def register(self, callable_type, callable_name, options):
        entry = CallableObject(self.kind, self.get_class(callable_name), options)
        return self.bridge.callables.add_class(entry)

    # one block per class, namespaces declared only once
    def get_script(self):
        prefix = self.config.get_option('core.prefix.class', '')
        declared = set()
        return '\n'.join([ entry.get_script(prefix, declared) for entry in self.bridge.callables.get_classes(self.kind) ])

    def can_process_request(self, request):
        target = request.target
        return target is not None and target.is_class()

    def process_request(self, request):
        target = request.target
        entry = self.bridge.callables.get_class(target.name)
        if entry is None:
            raise RequestError(self.translator.trans('errors.request.callable', { 'name': target.name }))
        if not entry.has_method(target.method):
            raise RequestError(self.translator.trans('errors.class.method', { 'method': target.method, 'class': target.name }))

        logger.debug('calling %s.%s', entry.name, target.method)
        instance = entry.get_instance(request)
        request.response_manager.append(getattr(instance, target.method)(*request.args))
        return True
