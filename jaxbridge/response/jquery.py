from jaxbridge.calls import js_value
from jaxbridge.plugins import CAPABILITIES, CodeGeneratorPlugin, ResponsePlugin
from jaxbridge.templating import render_js

import json

# a jQuery selector and the calls chained on it
#
#   response.jq('#message').html('Saved').addClass('success')
#   >>> $("#message").html("Saved").addClass("success")
#
# Any attribute is a jQuery method; call() does the same for method
# names that clash with the ones below. set() assigns a property
# and ends the chain.
#
# The javascript is only produced when the response is sent, so
# the chain can be extended after the command was added.
#
class DomSelector(object):

    def __init__(self, jquery, path = '', context = None):
        self._jquery = jquery
        self._path = path
        self._context = context
        self._calls = []

    def call(self, method, *args):
        self._calls.append('%s(%s)' % (method, ', '.join([ js_value(arg) for arg in args ])))
        return self

    def set(self, attribute, value):
        self._calls.append('%s = %s' % (attribute, js_value(value)))
        return self

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        def method(*args):
            return self.call(name, *args)
        return method

    def get_script(self):
        if not self._path:
            script = '%s(this)' % self._jquery
        elif self._context is None:
            script = '%s(%s)' % (self._jquery, json.dumps(self._path))
        elif hasattr(self._context, 'get_script'):
            script = '%s(%s, %s)' % (self._jquery, json.dumps(self._path), self._context.get_script())
        else:
            script = '%s(%s, %s(%s))' % (self._jquery, json.dumps(self._path), self._jquery, json.dumps(self._context))
        if self._calls:
            script = '.'.join([ script ] + self._calls)
        return script

    def to_json(self):
        return self.get_script()

    def __str__(self):
        return self.get_script()

class JQueryPlugin(ResponsePlugin, CodeGeneratorPlugin):
    capabilities = CAPABILITIES.RESPONSE_PLUGIN | CAPABILITIES.CODE_GENERATOR

    NAME = 'jquery'

    def get_script(self):
        return render_js('jaxbridge/jquery.js')

    # a selector whose calls are run by the browser
    def element(self, path = '', context = None):
        jquery = 'jQuery' if self.config.get_option('core.jquery.no_conflict') else '$'
        selector = DomSelector(jquery, path, context)
        self.add_command({ 'cmd': 'jquery' }, selector)
        return selector
