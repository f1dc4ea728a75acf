# base class for classes exposed to the browser
#
# Deriving from CallableClass is how a class gets at the request
# it serves. Before a request calls into the class, the instance
# gets:
#
#   response    the request's global response; add commands to it
#   request     the AjaxRequest being served
#   files       the uploaded files, a dict of field name to a list
#               of UploadedFile (empty when nothing was uploaded)
#
# and setup() is called once. Use setup() instead of __init__ for
# anything that needs these.
#
# Neither setup() nor rq() is exposed to the browser, and neither
# is any name starting with _.
#
class CallableClass(object):
    response = None
    request = None
    files = None

    _callable = None

    def _bind(self, callable_object, request):
        self._callable = callable_object
        self.request = request
        self.response = request.response_manager.response
        self.files = request.uploaded_files
        self.setup()

    def setup(self):
        pass

    # a call factory for this class, or for another registered
    # class when a name is given
    def rq(self, name = None):
        return self.request.bridge.rq(name or self._callable.name)
