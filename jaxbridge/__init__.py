# a bridge between the browser and python callables
#
# this is a high-level package that exports most symbols from
# sub-modules; see those packages for implementation details

# The bridge lets pages call server-side python as if it were
# javascript. It works in three steps:
#
# 1. Registration, at startup.
#
#    Functions, classes and directories of classes are registered
#    with a Bridge. Each registration type is handled by a plugin
#    (see jaxbridge.callables), and the bridge keeps everything in
#    one registry where every name is unique.
#
# 2. Code generation, when a page is rendered.
#
#    The bridge generates a javascript stub for every registered
#    function and method; calling a stub sends an ajax request to
#    the bridge. Plugins contribute their own javascript too (see
#    jaxbridge.plugins.codegen). Use the template tags in
#    jaxbridge.templatetags.jaxbridge to put it in a page.
#
# 3. Dispatch, for every call.
#
#    The request names its target (jxnfun, or jxncls and jxnmthd)
#    and carries its arguments (jxnargs). The dispatcher finds the
#    plugin that handles it, the plugin calls the function or
#    method, and the callable adds commands to the request's
#    response. The response goes back as json:
#
#    {
#        'jxnobj': [
#            { 'cmd': 'assign', 'id': 'message', 'prop': 'innerHTML', 'data': 'Saved' },
#            { 'cmd': 'jquery', 'plg': 'jquery', 'data': '$("#list").fadeIn()' },
#            ...
#        ],
#        'jxnrv': <return value, only when one was set>
#    }
#
#    which the client library runs in order.
#
# Requests may also carry data bags (jxnbags, see
# jaxbridge.response.databag) and files (see jaxbridge.upload).
#
# Errors with a request (an unknown callable, bad arguments, a
# rejected upload) are answered with an alert command. Anything
# else is an exception: BridgeView logs it the way Django does and
# answers with commands as well, so that the browser never gets an
# HTML error page.

from jaxbridge.bridge import Bridge, get_bridge, reset_bridge
from jaxbridge.callables.base import CallableClass
from jaxbridge.calls import form_values, input_value, js
from jaxbridge.exceptions import BridgeError, ConfigurationError, InvalidResponseData, RequestError, UploadError
from jaxbridge.packages import Package
from jaxbridge.plugins import CAPABILITIES, CodeGeneratorPlugin, CallableRegistryPlugin, RequestHandlerPlugin, ResponsePlugin
from jaxbridge.response.response import Response
