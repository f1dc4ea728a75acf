from jaxbridge.exceptions import ConfigurationError
from jaxbridge.templating import render_js

import inspect
import json
import logging

logger = logging.getLogger('jaxbridge.callables')

# methods of CallableClass that are plumbing, not endpoints
DEFAULT_EXCLUDED = ('setup', 'rq')

# call options are emitted into the stubs as they are: a string is
# a javascript expression ("'synchronous'" with the quotes, or the
# name of a callback) and anything else is json-encoded
def js_options(options):
    items = []
    for key in sorted(options):
        value = options[key]
        items.append((key, value if isinstance(value, str) else json.dumps(value)))
    return items

# a registered plain function
#
class CallableFunction(object):
    kind = 'function'

    def __init__(self, function, name, options = None):
        self.function = function
        self.name = name
        self.options = options or {}

    def get_js_name(self, prefix):
        return prefix + self.name

    def call(self, response, args):
        return self.function(response, *args)

    def get_script(self, prefix):
        return render_js('jaxbridge/function.js', {
                'js_name': self.get_js_name(prefix),
                'name': json.dumps(self.name),
                'options': js_options(self.options),
            })

    def __repr__(self):
        return '<CallableFunction %s>' % self.name

# a registered class whose public methods are callable
#
# The name the browser uses is the classpath (the 'classpath' or
# 'namespace' option, dotted) followed by the class name; each
# method is then reached as <name>.<method>.
#
# Not exposed: anything starting with _, the CallableClass plumbing
# (setup, rq) and the names given in the 'excluded' option.
#
# The 'functions' option holds call options per method name; the
# entry under '*' applies to every method and is overridden by the
# method's own entry.
#
class CallableObject(object):

    def __init__(self, kind, klass, options = None):
        options = options or {}
        self.kind = kind
        self.klass = klass

        classpath = options.get('classpath') or options.get('namespace') or ''
        self.classpath = classpath.strip('.')
        if self.classpath:
            self.name = '%s.%s' % (self.classpath, klass.__name__)
        else:
            self.name = klass.__name__

        self.excluded = set(DEFAULT_EXCLUDED) | set(options.get('excluded', []))
        self.functions = options.get('functions', {})

    def get_methods(self):
        methods = []
        for name, member in inspect.getmembers(self.klass, inspect.isroutine):
            if name.startswith('_') or name in self.excluded:
                continue
            methods.append(name)
        return methods

    def has_method(self, method):
        return method in self.get_methods()

    def get_qualified_names(self):
        return [ '%s.%s' % (self.name, method) for method in self.get_methods() ]

    def get_method_options(self, method):
        options = dict(self.functions.get('*', {}))
        options.update(self.functions.get(method, {}))
        return options

    def get_js_name(self, prefix):
        return prefix + self.name

    # the instance serving a request; built and set up once per
    # request, so that a class called twice in the same request
    # keeps its state
    def get_instance(self, request):
        instances = request.callable_instances
        if self.name not in instances:
            instance = self.klass()
            if hasattr(instance, '_bind'):
                instance._bind(self, request)
            instances[self.name] = instance
        return instances[self.name]

    # namespaces: the javascript objects that must exist before the
    # class object itself can be declared, outermost first
    def get_namespaces(self, prefix):
        parts = self.get_js_name(prefix).split('.')
        declarations = []
        for i in range(1, len(parts)):
            path = '.'.join(parts[:i])
            if i == 1:
                declarations.append('var %s = %s || {};' % (path, path))
            else:
                declarations.append('%s = %s || {};' % (path, path))
        return declarations

    def get_script(self, prefix, declared = None):
        declared = declared if declared is not None else set()
        namespaces = []
        for declaration in self.get_namespaces(prefix):
            if declaration not in declared:
                declared.add(declaration)
                namespaces.append(declaration)

        return render_js('jaxbridge/class.js', {
                'namespaces': namespaces,
                'js_name': self.get_js_name(prefix),
                'class_name': json.dumps(self.name),
                'methods': [ {
                        'name': method,
                        'json_name': json.dumps(method),
                        'options': js_options(self.get_method_options(method)),
                    } for method in self.get_methods() ],
            })

    def __repr__(self):
        return '<CallableObject %s (%s)>' % (self.name, self.kind)

# every callable known to the bridge
#
# Names are unique across the whole registry: a function name, a
# class name and every <class>.<method> name may only be claimed
# once. A registration that would collide is refused as a whole.
#
# The registry is frozen once client code has been generated;
# registering afterwards is a ConfigurationError.
#
class CallableRegistry(object):

    def __init__(self, translator):
        self.translator = translator
        self.functions = {}
        self.classes = {}
        self._names = set()
        self.frozen = False

    def freeze(self):
        self.frozen = True

    def _reserve(self, name, names):
        if self.frozen:
            raise ConfigurationError(self.translator.trans('errors.register.frozen', { 'name': name }))
        for qualified_name in names:
            if qualified_name in self._names:
                raise ConfigurationError(self.translator.trans('errors.register.duplicate', { 'name': qualified_name }))
        self._names.update(names)

    def add_function(self, entry):
        self._reserve(entry.name, [ entry.name ])
        self.functions[entry.name] = entry
        logger.debug('registered function %s', entry.name)
        return entry

    def add_class(self, entry):
        self._reserve(entry.name, [ entry.name ] + entry.get_qualified_names())
        self.classes[entry.name] = entry
        logger.debug('registered class %s with methods %s', entry.name, ', '.join(entry.get_methods()))
        return entry

    def get_function(self, name):
        return self.functions.get(name)

    def get_class(self, name):
        return self.classes.get(name)

    # registered classes, in registration order, optionally only
    # those registered with the given kind
    def get_classes(self, kind = None):
        return [ entry for entry in self.classes.values() if kind is None or entry.kind == kind ]
