from django.core.serializers.json import DjangoJSONEncoder

from jaxbridge.exceptions import InvalidResponseData

import json

# the wire format
#
# Command data may hold objects that are only turned into
# javascript when the response is sent (selectors, calls); they
# provide a to_json() method.
#
class ResponseEncoder(DjangoJSONEncoder):

    def default(self, o):
        if hasattr(o, 'to_json'):
            return o.to_json()
        return super(ResponseEncoder, self).default(o)

# attribute values go over the wire as strings, trimmed, except
# for integers which are kept as they are; booleans are sent as
# '1' and ''
def clean_attribute(value):
    if isinstance(value, bool):
        return '1' if value else ''
    if isinstance(value, int):
        return value
    if value is None:
        return ''
    return str(value).strip(' \t')

# command data is trimmed all the way down; values that are not
# strings are left alone
def clean_data(data):
    if isinstance(data, str):
        return data.strip(' \t\n')
    if isinstance(data, (list, tuple)):
        return [ clean_data(item) for item in data ]
    if isinstance(data, dict):
        return dict([ (key, clean_data(value)) for key, value in data.items() ])
    return data

# a response to the browser
#
# A response is an ordered list of commands for the client library
# to run, plus an optional return value for synchronous calls. It
# serializes as:
#
#   {
#       'jxnobj': [
#           { <attributes>, 'cmd': <command>, 'data': <data> },
#           { <attributes>, 'plg': <plugin name>, 'data': <data> },
#           ...
#       ],
#       'jxnrv': <return value>,
#   }
#
# where 'jxnrv' is only present when a return value was set. A
# return value is set when it is not None, so 0, '' and False are
# all sent.
#
# Commands are kept in the order they were added, except when
# another response is merged in front (see append_response()).
#
# Response plugins are reached with plugin(name), or the shortcuts
# jq(), bag() and dialog(); all of them return None when the
# plugin is not registered.
#
class Response(object):
    content_type = 'application/json'

    def __init__(self, bridge = None, request = None):
        self.bridge = bridge
        self.request = request
        self.commands = []
        self.plugin_instances = {}
        self._return_value = None

    @property
    def translator(self):
        if self.bridge is not None:
            return self.bridge.translator
        from jaxbridge.translation import Translator
        return Translator()

    #
    # plugins
    #

    def plugin(self, name):
        if self.bridge is None:
            return None
        return self.bridge.plugin_manager.get_response_plugin(name, self)

    # a jQuery selector; the methods called on it are sent along
    def jq(self, path = '', context = None):
        plugin = self.plugin('jquery')
        return plugin.element(path, context) if plugin is not None else None

    def bag(self, name):
        plugin = self.plugin('bags')
        return plugin.bag(name) if plugin is not None else None

    def dialog(self):
        return self.plugin('dialog')

    #
    # the command buffer
    #

    def add_command(self, attributes, data):
        command = dict([ (key, clean_attribute(value)) for key, value in attributes.items() ])
        command['data'] = data
        self.commands.append(command)
        return self

    # add a core command; with remove_empty, attributes left
    # empty are not sent
    def _add_command(self, name, attributes, data, remove_empty = False):
        attributes = dict(attributes)
        if remove_empty:
            for key in list(attributes):
                if attributes[key] == '':
                    del attributes[key]
        attributes['cmd'] = name
        return self.add_command(attributes, clean_data(data))

    def add_plugin_command(self, plugin, attributes, data):
        attributes = dict(attributes)
        attributes['plg'] = plugin.name
        return self.add_command(attributes, data)

    def get_commands(self):
        return self.commands

    def get_command_count(self):
        return len(self.commands)

    def clear_commands(self):
        self.commands = []
        return self

    # empty the response; unlike clear_commands(), this also drops
    # the return value
    def clear(self):
        self.commands = []
        self._return_value = None
        return self

    def set_return_value(self, value):
        self._return_value = value
        return self

    def get_return_value(self):
        return self._return_value

    def has_return_value(self):
        return self._return_value is not None

    # add the commands of another response, or a list of commands,
    # after (or, with prepend, before) the commands of this one
    #
    # NOTE: the return value of the other response replaces ours,
    # but only if it has one
    #
    def append_response(self, source, prepend = False):
        if isinstance(source, Response):
            if source.has_return_value():
                self._return_value = source.get_return_value()
            commands = list(source.commands)
        elif isinstance(source, list):
            commands = list(source)
        else:
            raise InvalidResponseData(self.translator.trans('errors.response.data.invalid'))

        if prepend:
            self.commands = commands + self.commands
        else:
            self.commands = self.commands + commands
        return self

    def merge(self, source, prepend = False):
        return self.append_response(source, prepend)

    def to_json(self):
        output = { 'jxnobj': self.commands }
        if self.has_return_value():
            output['jxnrv'] = self._return_value
        return output

    def get_output(self):
        return json.dumps(self.to_json(), cls = ResponseEncoder)

    #
    # DOM commands
    #

    # set an attribute of an element ('innerHTML', 'style.color', ...)
    def assign(self, target, attribute, data):
        return self._add_command('assign', { 'id': target, 'prop': attribute }, data)

    # set the content of an element
    def html(self, target, data):
        return self.assign(target, 'innerHTML', data)

    def append(self, target, attribute, data):
        return self._add_command('append', { 'id': target, 'prop': attribute }, data)

    def prepend(self, target, attribute, data):
        return self._add_command('prepend', { 'id': target, 'prop': attribute }, data)

    # replace every occurrence of search in an attribute
    def replace(self, target, attribute, search, data):
        return self._add_command('replace', { 'id': target, 'prop': attribute }, { 's': search, 'r': data })

    def empty(self, target, attribute = 'innerHTML'):
        return self.assign(target, attribute, '')

    def remove(self, target):
        return self._add_command('remove', { 'id': target }, '')

    # add an element of type tag as the last child of parent
    def create(self, parent, tag, element_id):
        return self._add_command('create', { 'id': parent, 'prop': element_id }, tag)

    def insert_before(self, target, tag, element_id):
        return self._add_command('insert.before', { 'id': target, 'prop': element_id }, tag)

    def insert_after(self, target, tag, element_id):
        return self._add_command('insert.after', { 'id': target, 'prop': element_id }, tag)

    def script(self, script):
        return self._add_command('script', {}, str(script))

    # call a javascript function with the given arguments
    def call(self, function, *args):
        return self._add_command('call', { 'func': function }, list(args))

    def alert(self, message):
        return self._add_command('alert', {}, message)

    def redirect(self, url, delay = 0):
        return self._add_command('redirect', { 'delay': delay }, url)

    def debug(self, message):
        return self._add_command('debug', {}, message)

    # replace the handler code of an event ('onclick', ...)
    def set_event(self, target, event, script):
        return self._add_command('event.set', { 'id': target, 'prop': event }, str(script))

    def add_handler(self, target, event, handler):
        return self._add_command('handler.add', { 'id': target, 'prop': event }, handler)

    def remove_handler(self, target, event, handler):
        return self._add_command('handler.remove', { 'id': target, 'prop': event }, handler)

    def include_script(self, uri, script_type = 'text/javascript', element_id = ''):
        return self._add_command('script.include', { 'type': script_type, 'elm_id': element_id }, uri, True)

    def include_css(self, uri, media = ''):
        return self._add_command('css.include', { 'media': media }, uri, True)

    def remove_css(self, uri, media = ''):
        return self._add_command('css.remove', { 'media': media }, uri, True)

    # pause the processing of the commands, in tenths of seconds
    def sleep(self, tenths):
        return self._add_command('sleep', { 'prop': tenths }, '')
