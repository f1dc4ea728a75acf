from jaxbridge.exceptions import RequestError
from jaxbridge.response.manager import ResponseManager

import json
import logging

logger = logging.getLogger('jaxbridge.request')

# what the browser asked to call
#
class CallTarget(object):
    FUNCTION = 'function'
    CLASS = 'class'

    def __init__(self, kind, name, method = None):
        self.kind = kind
        self.name = name
        self.method = method

    def is_function(self):
        return self.kind == self.FUNCTION

    def is_class(self):
        return self.kind == self.CLASS

    def __repr__(self):
        if self.method:
            return '<CallTarget %s.%s>' % (self.name, self.method)
        return '<CallTarget %s>' % self.name

# reads the call target and arguments from a request
#
# The target is either a function (jxnfun) or a class and one of
# its methods (jxncls and jxnmthd).
#
# The arguments (jxnargs) come either as a single json list, or as
# one form value per argument, each starting with a type prefix:
#
#   S   a string                'Shello'
#   N   a number                'N42', 'N1.5'
#   B   a boolean               'Btrue', 'Bfalse'
#   *   any json value          '*{"a": 1}'
#
# A json request body (see AjaxRequest) may also hold the list
# itself.
#
class ParameterReader(object):

    def __init__(self, translator):
        self.translator = translator

    def target(self, request):
        function = request.value('jxnfun')
        if function:
            return CallTarget(CallTarget.FUNCTION, function)
        klass = request.value('jxncls')
        method = request.value('jxnmthd')
        if klass and method:
            return CallTarget(CallTarget.CLASS, klass, method)
        return None

    def args(self, request):
        values = request.values('jxnargs')
        if len(values) == 1:
            if isinstance(values[0], (list, tuple)):
                return list(values[0])
            if isinstance(values[0], str) and values[0].startswith('['):
                try:
                    args = json.loads(values[0])
                except ValueError:
                    raise RequestError(self.translator.trans('errors.request.args'))
                if not isinstance(args, list):
                    raise RequestError(self.translator.trans('errors.request.args'))
                return args
        return [ self.convert(value) for value in values ]

    def convert(self, value):
        if not isinstance(value, str) or not value:
            raise RequestError(self.translator.trans('errors.request.args'))
        prefix, rest = value[0], value[1:]
        if prefix == 'S':
            return rest
        if prefix == 'B':
            return rest.lower() in ('true', '1')
        try:
            if prefix == 'N':
                return float(rest) if '.' in rest or 'e' in rest.lower() else int(rest)
            if prefix == '*':
                return json.loads(rest)
        except ValueError:
            pass
        raise RequestError(self.translator.trans('errors.request.args'))

# the context of one request served by the bridge
#
# Everything a component needs to know about the inbound request
# goes through here; nothing reads the Django request directly.
#
#   value(name)         a single field, from a json body, then POST,
#                       then GET
#   values(name)        every value of a field (also accepts the
#                       name[] form that browsers send for lists)
#   files               the uploaded files, by field name
#   target, args        the call, read by the ParameterReader
#   uploaded_files      UploadedFile lists by field name, set when
#                       the upload handler has run
#   response_manager    holds the request's global response
#
class AjaxRequest(object):

    def __init__(self, http_request, bridge):
        self.http_request = http_request
        self.bridge = bridge
        self.reader = ParameterReader(bridge.translator)

        self.plugin_instances = {}
        self.callable_instances = {}
        self.uploaded_files = {}
        self.response_manager = ResponseManager(bridge, self)

        self.data = {}
        if http_request.content_type == 'application/json' and http_request.body:
            try:
                data = json.loads(http_request.body.decode(http_request.encoding or 'utf-8'))
            except ValueError:
                logger.warning('ignoring a request body that is not valid json')
                data = None
            if isinstance(data, dict):
                self.data = data

        self._target = None
        self._args = None

    def values(self, name):
        if name in self.data:
            return [ self.data[name] ]
        for query in (self.http_request.POST, self.http_request.GET):
            for key in (name, name + '[]'):
                if key in query:
                    return query.getlist(key)
        return []

    def value(self, name, default = None):
        values = self.values(name)
        return values[0] if values else default

    def has_value(self, name):
        return bool(self.values(name))

    @property
    def files(self):
        return dict([ (field, self.http_request.FILES.getlist(field)) for field in self.http_request.FILES ])

    @property
    def target(self):
        if self._target is None:
            self._target = self.reader.target(self)
        return self._target

    @property
    def args(self):
        if self._args is None:
            self._args = self.reader.args(self)
        return self._args

    # a call from a generated stub, as opposed to a plain form post
    def is_call(self):
        return self.target is not None
