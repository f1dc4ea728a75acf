from django.core.serializers.json import DjangoJSONEncoder

import json

# building javascript calls to registered callables
#
# Pages and responses often need the javascript that calls a
# registered function or class method, e.g. in an onclick handler
# or in a script command:
#
#   bridge.rq().say_hello(js('this.value'))
#   >>> jaxon_say_hello(this.value)
#
#   bridge.rq('Calendar').show(2024, 5).confirm('Change the month?')
#   >>> if(confirm("Change the month?")){JaxonCalendar.show(2024, 5);}
#
# Python values are json-encoded; wrap javascript code in js() to
# have it emitted as it is.

# a piece of javascript code, emitted without encoding
#
class JsExpression(object):

    def __init__(self, script):
        self.script = script

    def get_script(self):
        return self.script

    def to_json(self):
        return self.get_script()

    def __str__(self):
        return self.get_script()

def js(script):
    return JsExpression(script)

# the values of all the fields of a form, as a js object
def form_values(form_id):
    return JsExpression('jaxon.getFormValues(%s)' % json.dumps(form_id))

# the value of an input field
def input_value(input_id):
    return JsExpression('jaxon.$(%s).value' % json.dumps(input_id))

# a value as javascript code
def js_value(value):
    if hasattr(value, 'get_script'):
        return value.get_script()
    return json.dumps(value, cls = DjangoJSONEncoder)

# a call to a javascript function, optionally guarded
#
# Conditions added with when(), unless(), the if*() comparisons and
# confirm() all have to hold for the call to be made; else_show()
# gives a message to display when they don't.
#
class JsCall(object):

    def __init__(self, function, args = None):
        self.function = function
        self.args = list(args or [])
        self.conditions = []
        self.message = None

    def when(self, condition):
        self.conditions.append(js_value(condition))
        return self

    def unless(self, condition):
        self.conditions.append('!(%s)' % js_value(condition))
        return self

    def _compare(self, operator, first, second):
        self.conditions.append('(%s %s %s)' % (js_value(first), operator, js_value(second)))
        return self

    def ifeq(self, first, second):
        return self._compare('==', first, second)

    def ifne(self, first, second):
        return self._compare('!=', first, second)

    def ifgt(self, first, second):
        return self._compare('>', first, second)

    def ifge(self, first, second):
        return self._compare('>=', first, second)

    def iflt(self, first, second):
        return self._compare('<', first, second)

    def ifle(self, first, second):
        return self._compare('<=', first, second)

    def confirm(self, question):
        self.conditions.append('confirm(%s)' % js_value(question))
        return self

    # NOTE: only used when the call has conditions
    def else_show(self, message):
        self.message = message
        return self

    def get_script(self):
        call = '%s(%s)' % (self.function, ', '.join([ js_value(arg) for arg in self.args ]))
        if not self.conditions:
            return call
        script = 'if(%s){%s;}' % (' && '.join(self.conditions), call)
        if self.message is not None:
            script += 'else{alert(%s);}' % js_value(self.message)
        return script

    def to_json(self):
        return self.get_script()

    def __str__(self):
        return self.get_script()

# builds JsCalls for the functions or methods below a prefix;
# any attribute is a method name
#
class CallFactory(object):

    def __init__(self, prefix):
        self._prefix = prefix

    def call(self, name, *args):
        return JsCall(self._prefix + name, args)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        def make_call(*args):
            return self.call(name, *args)
        return make_call

# call factories for a bridge
#
#   rq()            registered functions
#   rq(name)        the methods of a registered class
#
class RequestFactory(object):

    def __init__(self, bridge):
        self.bridge = bridge

    def rq(self, name = None):
        config = self.bridge.config
        if name is None:
            return CallFactory(config.get_option('core.prefix.function', ''))
        prefix = config.get_option('core.prefix.class', '')
        entry = self.bridge.callables.get_class(name)
        return CallFactory('%s.' % (entry.get_js_name(prefix) if entry is not None else prefix + name))
