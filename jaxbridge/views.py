from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest
from django.views.generic import View

from jaxbridge.bridge import get_bridge
from jaxbridge.response.response import Response
from jaxbridge.translation import Translator

import logging
import sys
import traceback

logger = logging.getLogger('jaxbridge.views')

# the endpoint the generated stubs post to
#
# Use it as it is, with the bridge from settings.JAXBRIDGE_FACTORY:
#
#   path('ajax/', BridgeView.as_view()),
#
# or give it a bridge:
#
#   path('ajax/', BridgeView.as_view(bridge = my_bridge)),
#
# A POST the bridge doesn't handle goes to get() when the view has
# one (e.g. when combined with TemplateView, to serve the page and
# its calls from the same url); otherwise it's a 400.
#
class BridgeView(View):
    bridge = None

    def get_bridge(self):
        return self.bridge if self.bridge is not None else get_bridge()

    # special handling: if an exception escapes the bridge we DO
    # NOT want Django's HTML error page going to the browser, which
    # expects commands. Catch it and answer with commands, the same
    # way the bridge answers its own errors.
    def dispatch(self, request, *args, **kwargs):

        # non-POST requests are not wrapped
        if request.method != 'POST':
            return super(BridgeView, self).dispatch(request, *args, **kwargs)

        try:
            results = super(BridgeView, self).dispatch(request, *args, **kwargs)
            if getattr(settings, 'JAXBRIDGE_DUMP_INFO', False):
                logger.info('bridge result: %s', results.content)
            return results

        except Exception as e:
            # settings.DEBUG decides on backtraces, as it does for
            # page requests; it is always OFF in production
            response = Response()
            if settings.DEBUG:
                backtrace_text = ''.join(traceback.format_exception(*sys.exc_info()))
                response.alert('%s: %s' % (e.__class__.__name__, e))
                response.debug(backtrace_text)
            else:
                # this is how Django logs the exception (see
                # django.core.handlers.exception), so the admins still
                # get their email
                logging.getLogger('django.request').error('Internal Server Error: %s', request.path,
                    exc_info = sys.exc_info(),
                    extra = {
                        'status_code': 500,
                        'request': request
                    }
                )
                response.alert(Translator().trans('errors.response.exception'))

            if getattr(settings, 'JAXBRIDGE_DUMP_INFO', False):
                logger.info('bridge exception result: %s', response.get_output())
            http_response = HttpResponse(response.get_output())
            http_response['Content-Type'] = response.content_type
            return http_response

    def post(self, request, *args, **kwargs):
        result = self.get_bridge().dispatch(request)
        if not result.handled:
            return self.not_handled(request, *args, **kwargs)
        return result.http_response()

    def not_handled(self, request, *args, **kwargs):
        if hasattr(self, 'get'):
            return self.get(request, *args, **kwargs)
        return HttpResponseBadRequest()
