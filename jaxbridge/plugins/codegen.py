from django.middleware.csrf import get_token

from jaxbridge.templating import render_js

import json
import logging

logger = logging.getLogger('jaxbridge.plugins')

# client code generation
#
# Every plugin declaring the CODE_GENERATOR capability is handed
# to the CodeGenerator when it is registered. When a page asks for
# the client bundle, the generators are visited in ascending
# priority, ties broken by registration order, and their fragments
# are concatenated with blank lines in between.
#
# NOTE: this ordering matters. The fragments of later generators
# use the javascript objects declared by earlier ones (the class
# stubs at 101 must exist before anything at 700 refers to them).
#
# Generating the bundle freezes the callable registry: the stubs
# already sent to a browser could not know about later additions.
#
class CodeGenerator(object):

    def __init__(self, bridge):
        self.bridge = bridge
        self._records = []

    # a registration under a name already used replaces the first
    # one but keeps its place in the registration order
    def add_generator(self, record):
        for i, existing in enumerate(self._records):
            if existing.name == record.name:
                self._records[i] = record
                return
        self._records.append(record)

    # generator instances in output order; sorted() is stable so
    # equal priorities stay in registration order
    def get_generators(self):
        records = sorted(self._records, key = lambda record: record.priority)
        manager = self.bridge.plugin_manager
        return [ manager.get_instance(record) for record in records ]

    def _collect(self, hook):
        fragments = []
        for generator in self.get_generators():
            code = getattr(generator, hook)().strip()
            if code:
                fragments.append(code)
        return '\n\n'.join(fragments)

    def get_css(self):
        return self._collect('get_css')

    # script tags for the client library and the plugins' libraries
    def get_js(self):
        fragments = []
        lib_uri = self.bridge.config.get_option('js.lib.uri')
        if lib_uri:
            fragments.append('<script type="text/javascript" src="%s"></script>' % lib_uri)
        code = self._collect('get_js')
        if code:
            fragments.append(code)
        return '\n\n'.join(fragments)

    # the client library settings; the csrf token is only known
    # when the bundle is rendered for a request
    def get_config_script(self, request = None):
        config = self.bridge.config
        return render_js('jaxbridge/config.js', {
                'uri': json.dumps(config.get_option('core.request.uri', '')),
                'mode': json.dumps(config.get_option('core.request.mode', 'asynchronous')),
                'method': json.dumps(config.get_option('core.request.method', 'POST')),
                'debug': json.dumps(bool(config.get_option('core.debug.on'))),
                'no_conflict': json.dumps(bool(config.get_option('core.jquery.no_conflict'))),
                'csrf': json.dumps(get_token(request)) if request is not None else None,
            })

    # the complete <script> block: library settings, then stubs and
    # plugin scripts, then the scripts to run once the page is ready
    #
    # include_js and include_css prepend the output of get_js() and
    # get_css(), for pages that don't include them separately
    #
    def get_script(self, include_js = False, include_css = False, request = None):
        self.bridge.callables.freeze()

        parts = []
        if include_css:
            parts.append(self.get_css())
        if include_js:
            parts.append(self.get_js())

        parts.append(render_js('jaxbridge/script.html', {
                'config': self.get_config_script(request),
                'script': self._collect('get_script'),
                'ready_script': self._collect('get_ready_script'),
            }))
        for generator in self.get_generators():
            generator.script_rendered()

        logger.debug('generated client script with %d generators', len(self._records))
        return '\n\n'.join([ part for part in parts if part ])
