from jaxbridge.callables.base import CallableClass
from jaxbridge.callables.klass import CallableClassPlugin
from jaxbridge.callables.registry import CallableObject
from jaxbridge.common import find_modules, jaxbridge_slugify
from jaxbridge.exceptions import ConfigurationError
from jaxbridge.plugins import CAPABILITIES

import importlib
import importlib.util
import inspect
import logging
import os
import sys

logger = logging.getLogger('jaxbridge.callables')

# directories of classes
#
#   bridge.register('dir', '/path/to/myapp/ajax', 'myapp.ajax')
#   bridge.register('dir', '/path/to/scripts')
#
# With a namespace, the directory is the python package of that
# name; it is scanned recursively, modules are imported by their
# dotted name, and each class gets the namespace plus the
# sub-packages it was found in as its classpath.
#
# Without one, only the files directly in the directory are
# loaded, by path, and the classes get no classpath.
#
# Every CallableClass subclass defined in a scanned module is
# registered. The 'excluded' and 'functions' options apply to all
# of them; 'classes' holds options for individual classes, keyed
# by class name.
#
# Requests for these classes are served by the 'class' plugin.
#
class CallableDirPlugin(CallableClassPlugin):
    capabilities = CAPABILITIES.CALLABLE_REGISTRY | CAPABILITIES.CODE_GENERATOR

    kind = 'dir'

    def check_options(self, callable_name, options):
        if isinstance(options, str):
            options = { 'namespace': options }
        options = super(CallableDirPlugin, self).check_options(callable_name, options)
        classes = options.get('classes', {})
        if not isinstance(classes, dict):
            raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': callable_name }))

        # the options of each class are checked the way a single class
        # registration checks them; a class without its own functions
        # keeps those of the directory
        checked = {}
        for class_name, class_options in classes.items():
            if not isinstance(class_options, dict):
                raise ConfigurationError(self.translator.trans('errors.options.invalid', { 'name': '%s.%s' % (callable_name, class_name) }))
            checked[class_name] = super(CallableDirPlugin, self).check_options(class_name, class_options)
            if 'functions' not in class_options:
                del checked[class_name]['functions']
        options['classes'] = checked
        return options

    def register(self, callable_type, callable_name, options):
        path = callable_name
        if not os.path.isdir(path):
            raise ConfigurationError(self.translator.trans('errors.dir.invalid', { 'path': path }))

        namespace = (options.get('namespace') or '').strip('.')
        entries = []
        for subdirs, module_name, file_path in find_modules(path, recursive = bool(namespace)):
            if namespace:
                classpath = '.'.join([ namespace ] + subdirs)
                module = self.import_module('%s.%s' % (classpath, module_name))
            else:
                classpath = ''
                module = self.load_file(path, module_name, file_path)

            for klass in self.find_classes(module):
                own = options['classes'].get(klass.__name__, {})
                class_options = {
                        'classpath': classpath,
                        'excluded': options['excluded'] + own.get('excluded', []),
                        'functions': own.get('functions', options['functions']),
                    }
                entry = CallableObject(self.kind, klass, class_options)
                entries.append(self.bridge.callables.add_class(entry))

        logger.info('registered %d classes from %s', len(entries), path)
        return entries

    # load a module that is not part of any package; it is given
    # a name derived from its directory so that two directories
    # can hold modules with the same name
    def load_file(self, path, module_name, file_path):
        name = 'jaxbridge_dir_%s_%s' % (jaxbridge_slugify(path).replace('-', '_'), module_name)
        if name in sys.modules:
            return sys.modules[name]
        spec = importlib.util.spec_from_file_location(name, file_path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        return module

    def import_module(self, name):
        try:
            return importlib.import_module(name)
        except ImportError as e:
            logger.warning('cannot import %s: %s', name, e)
            raise ConfigurationError(self.translator.trans('errors.dir.module', { 'name': name }))

    # CallableClass subclasses defined in (not imported into) the module
    def find_classes(self, module):
        return [ klass for name, klass in inspect.getmembers(module, inspect.isclass)
                 if issubclass(klass, CallableClass) and klass is not CallableClass and klass.__module__ == module.__name__ ]
