from django.conf import settings

from jaxbridge.common import Enumeration
from jaxbridge.exceptions import RequestError
from jaxbridge.request import AjaxRequest
from jaxbridge.response.response import Response

import logging

logger = logging.getLogger('jaxbridge.dispatcher')

DISPATCH_STATES = Enumeration(
        (0, 'IDLE', 'idle'),
        (1, 'RESOLVING', 'looking for a handler'),
        (2, 'INVOKING', 'running the handler'),
        (3, 'SUCCEEDED', 'succeeded'),
        (4, 'FAILED', 'failed'),
    )

# the outcome of a dispatch
#
# handled is False when no handler wanted the request; the caller
# should then serve it some other way (usually by rendering the
# page).
#
class DispatchResult(object):

    def __init__(self, handled, state, request):
        self.handled = handled
        self.state = state
        self.request = request

    @property
    def response_manager(self):
        return self.request.response_manager

    @property
    def response(self):
        return self.request.response_manager.response

    def http_response(self):
        return self.request.response_manager.http_response()

# functions called around every call
#
#   before(request)             before the handler; returning False
#                               ends the request without calling it
#   after(request)              after the handler succeeded
#   error(request, exception)   when the handler raised
#
# The global response is at request.response_manager.response.
#
class CallbackManager(object):

    def __init__(self):
        self.before_callbacks = []
        self.after_callbacks = []
        self.error_callbacks = []

    def before(self, callback):
        self.before_callbacks.append(callback)
        return callback

    def after(self, callback):
        self.after_callbacks.append(callback)
        return callback

    def error(self, callback):
        self.error_callbacks.append(callback)
        return callback

    def run_before(self, request):
        proceed = True
        for callback in self.before_callbacks:
            if callback(request) is False:
                proceed = False
        return proceed

    def run_after(self, request):
        for callback in self.after_callbacks:
            callback(request)

    def run_error(self, request, exception):
        for callback in self.error_callbacks:
            callback(request, exception)

# one request going through the dispatcher
#
#   IDLE -> RESOLVING -> INVOKING -> SUCCEEDED
#                     |           -> FAILED
#                     -> IDLE (nobody wants it)
#
# RESOLVING asks the request handlers, in registration order,
# whether they can process the request; the first to say yes owns
# it and no other handler is asked to process it.
#
# A RequestError raised while INVOKING ends in FAILED with an error
# payload in the response. Any other exception also ends in FAILED
# but is raised again for the caller to deal with.
#
class Dispatch(object):

    def __init__(self, dispatcher, request):
        self.dispatcher = dispatcher
        self.bridge = dispatcher.bridge
        self.request = request
        self.state = DISPATCH_STATES.IDLE
        self.handler = None

    def move_to(self, state):
        logger.debug('dispatch %s -> %s', DISPATCH_STATES.get_label(self.state), DISPATCH_STATES.get_label(state))
        self.state = state

    def result(self, handled):
        return DispatchResult(handled, self.state, self.request)

    def resolve(self):
        for handler in self.bridge.plugin_manager.get_request_handlers():
            if handler.can_process_request(self.request):
                return handler
        return None

    def run(self):
        request = self.request
        self.move_to(DISPATCH_STATES.RESOLVING)
        self.handler = self.resolve()

        upload = self.bridge.upload_plugin
        uploading = upload is not None and upload.can_process_request(request)

        if self.handler is None:
            if not uploading:
                self.move_to(DISPATCH_STATES.IDLE)
                return self.result(False)
            # a form post with files: the first step of a two-step upload
            self.move_to(DISPATCH_STATES.INVOKING)
            upload.process_http_upload(request)
            self.move_to(DISPATCH_STATES.SUCCEEDED)
            return self.result(True)

        self.move_to(DISPATCH_STATES.INVOKING)
        callbacks = self.dispatcher.callbacks
        try:
            if uploading:
                upload.process_request(request)
            if callbacks.run_before(request):
                self.handler.process_request(request)
                callbacks.run_after(request)
            self.write_bags()

        except RequestError as e:
            self.move_to(DISPATCH_STATES.FAILED)
            logger.warning('request failed: %s', e)
            callbacks.run_error(request, e)
            request.response_manager.error(str(e))
            return self.result(True)

        except Exception as e:
            self.move_to(DISPATCH_STATES.FAILED)
            callbacks.run_error(request, e)
            raise

        self.move_to(DISPATCH_STATES.SUCCEEDED)
        return self.result(True)

    # data bags written to during the call go back to the browser
    def write_bags(self):
        response = self.request.response_manager.response
        if isinstance(response, Response):
            plugin = response.plugin('bags')
            if plugin is not None:
                plugin.write_command()

# serves requests for a bridge; each request gets its own Dispatch
#
class RequestDispatcher(object):

    def __init__(self, bridge):
        self.bridge = bridge
        self.callbacks = CallbackManager()

    def dispatch(self, http_request):
        request = AjaxRequest(http_request, self.bridge)
        if getattr(settings, 'JAXBRIDGE_DUMP_INFO', False):
            logger.info('bridge request: %s POST %s GET %s FILES %s', http_request.path,
                dict(http_request.POST), dict(http_request.GET), list(http_request.FILES))
        return Dispatch(self, request).run()
