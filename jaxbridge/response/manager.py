from django.http import HttpResponse

from jaxbridge.response.response import Response

import logging

logger = logging.getLogger('jaxbridge.response')

# the global response of a request
#
# Every response built while serving a request ends up here: the
# callables add commands to the global response directly, or
# return another response which append() merges in.
#
# The upload handler answers plain form posts with an HTML page
# instead (see jaxbridge.upload.response); appending one replaces
# the global response.
#
class ResponseManager(object):

    def __init__(self, bridge, request = None):
        self.bridge = bridge
        self.request = request
        self.response = Response(bridge, request)
        self.debug_messages = []

    def append(self, response):
        if response is None or response is self.response:
            return
        if isinstance(response, Response) and isinstance(self.response, Response):
            self.response.append_response(response)
        elif hasattr(response, 'get_output'):
            self.response = response

    # report an error in place of whatever the response held
    def error(self, message):
        if isinstance(self.response, Response):
            self.response.clear()
            self.response.alert(message)
        else:
            self.response.set_error(message)

    # messages sent as debug commands when debugging is on
    def debug(self, message):
        self.debug_messages.append(message)

    def get_output(self):
        if isinstance(self.response, Response) and self.bridge is not None and self.bridge.config.get_option('core.debug.on'):
            for message in self.debug_messages:
                self.response.debug(message)
            self.debug_messages = []
        return self.response.get_output()

    def http_response(self):
        response = HttpResponse(self.get_output())
        response['Content-Type'] = self.response.content_type
        return response
