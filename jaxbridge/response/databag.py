from jaxbridge.plugins import CAPABILITIES, CodeGeneratorPlugin, ResponsePlugin
from jaxbridge.templating import render_js

import json
import logging

logger = logging.getLogger('jaxbridge.response')

# data bags
#
# A bag is a named set of values kept by the browser and sent back
# with every request in the jxnbags field, as json:
#
#   jxnbags = {"cart": {"items": 3}, "user": {"tab": "profile"}}
#
# Callables read and write them through response.bag(name). When
# a value was set during the request, the whole store is sent back
# in one bags.set command, which the browser merges into its own
# copy bag by bag. Nothing is sent when no bag was written to.
#
class DataBag(object):

    def __init__(self, data = None):
        self.data = data or {}
        self.touched = False

    def get(self, bag, key, default = None):
        values = self.data.get(bag)
        if not isinstance(values, dict):
            return default
        return values.get(key, default)

    def set(self, bag, key, value):
        if not isinstance(self.data.get(bag), dict):
            self.data[bag] = {}
        self.data[bag][key] = value
        self.touched = True

# one bag of the store
class DataBagContext(object):

    def __init__(self, store, name):
        self.store = store
        self.name = name

    def get(self, key, default = None):
        return self.store.get(self.name, key, default)

    def set(self, key, value):
        self.store.set(self.name, key, value)
        return self

class DataBagPlugin(ResponsePlugin, CodeGeneratorPlugin):
    capabilities = CAPABILITIES.RESPONSE_PLUGIN | CAPABILITIES.CODE_GENERATOR

    NAME = 'bags'

    def __init__(self, bridge, request = None):
        super(DataBagPlugin, self).__init__(bridge, request)
        self._store = None

    # the store is read from the request the first time it is needed
    @property
    def store(self):
        if self._store is None:
            data = self.request.value('jxnbags') if self.request is not None else None
            if isinstance(data, str):
                try:
                    data = json.loads(data)
                except ValueError:
                    logger.warning('ignoring data bags that are not valid json')
                    data = None
            if not isinstance(data, dict):
                data = {}
            self._store = DataBag(data)
        return self._store

    def bag(self, name):
        return DataBagContext(self.store, name)

    def get_script(self):
        return render_js('jaxbridge/databag.js')

    # send the store back if it was written to
    def write_command(self):
        if self._store is not None and self._store.touched:
            self.add_command({ 'cmd': 'bags.set' }, self._store.data)
