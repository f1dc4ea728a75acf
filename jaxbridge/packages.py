from jaxbridge.exceptions import ConfigurationError
from jaxbridge.plugins import CAPABILITIES, CodeGeneratorPlugin

# packages
#
# A package bundles the callables of a reusable feature with the
# client code they need. Its config() returns what to register, as
# a dict or as the path of a json file holding the same dict:
#
#   {
#       'functions': [ 'myfeature.ajax.refresh' ],
#       'classes': {
#           'myfeature.ajax.Feed': { 'classpath': 'MyFeature' },
#       },
#       'directories': {
#           '/path/to/myfeature/ajax': 'myfeature.ajax',
#       },
#   }
#
# Each section is either a list of names, or a dict of names to the
# options they are registered with.
#
# Packages are code generators. Their ready script is only sent
# once the page calls ready() on the package, and only in the next
# script block rendered; override ready_script() rather than
# get_ready_script().
#
class Package(CodeGeneratorPlugin):
    capabilities = CAPABILITIES.CODE_GENERATOR

    def __init__(self, bridge, request = None):
        super(Package, self).__init__(bridge, request)
        self.options = {}
        self.is_ready = False

    @classmethod
    def config(cls):
        return {}

    def get_option(self, name, default = None):
        return self.options.get(name, default)

    def ready(self):
        self.is_ready = True

    def ready_script(self):
        return ''

    def get_ready_script(self):
        return self.ready_script() if self.is_ready else ''

    # ready() applies to the next rendered page only
    def script_rendered(self):
        self.is_ready = False

    # the markup the package's client code works on
    def get_html(self):
        return ''

# registers packages on a bridge and keeps their instances
#
class PackageManager(object):
    SECTIONS = (
            ('functions', 'function'),
            ('classes', 'class'),
            ('directories', 'dir'),
        )

    def __init__(self, bridge):
        self.bridge = bridge
        self.translator = bridge.translator
        self._records = {}

    def register(self, package_class, options = None):
        if isinstance(package_class, str):
            from django.utils.module_loading import import_string
            try:
                package_class = import_string(package_class)
            except ImportError:
                raise ConfigurationError(self.translator.trans('errors.package.invalid', { 'name': package_class }))
        if not isinstance(package_class, type) or not issubclass(package_class, Package):
            raise ConfigurationError(self.translator.trans('errors.package.invalid', { 'name': repr(package_class) }))

        name = '%s.%s' % (package_class.__module__, package_class.__name__)
        config = package_class.config()
        if isinstance(config, str):
            config = self.bridge.config.load_file(config)
        if not isinstance(config, dict):
            raise ConfigurationError(self.translator.trans('errors.package.config', { 'name': name }))

        record = self.bridge.plugin_manager.register_plugin(package_class, name)
        self._records[package_class] = record
        package = self.bridge.plugin_manager.get_instance(record)
        package.options = options or {}

        for section, callable_type in self.SECTIONS:
            entries = config.get(section, [])
            if isinstance(entries, dict):
                entries = entries.items()
            else:
                entries = [ (entry, None) for entry in entries ]
            for callable_name, callable_options in entries:
                self.bridge.register(callable_type, callable_name, callable_options)
        return package

    # the instance of a registered package, or None
    def get(self, package_class):
        record = self._records.get(package_class)
        if record is None:
            return None
        return self.bridge.plugin_manager.get_instance(record)
