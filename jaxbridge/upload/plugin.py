from jaxbridge.exceptions import RequestError
from jaxbridge.plugins import CAPABILITIES, RequestHandlerPlugin
from jaxbridge.upload.manager import UploadManager
from jaxbridge.upload.response import UploadResponse

import logging

logger = logging.getLogger('jaxbridge.upload')

# file uploads
#
# Files reach a callable in one of two ways:
#
#   1. along with the call itself (the browser can post files with
#      an ajax request); they are stored and handed to the callable
#   2. in two steps, for browsers that can't: the form is posted as
#      usual, the files are stored and the browser gets a token
#      back; the call that follows sends the token (jxnupl) and the
#      callable gets the files stored in step one
#
# The dispatcher asks this plugin before any other handler. When
# the request is also a call, this plugin only prepares the files
# (process_request()); when it isn't, the request is the first step
# of a two-step upload (process_http_upload()).
#
class UploadPlugin(RequestHandlerPlugin):
    capabilities = CAPABILITIES.REQUEST_HANDLER

    name = 'upload'

    def __init__(self, bridge, request = None):
        super(UploadPlugin, self).__init__(bridge, request)
        self.manager = UploadManager(bridge)

    def sanitizer(self, sanitizer):
        self.manager.set_sanitizer(sanitizer)

    def can_process_request(self, request):
        return bool(request.files) or bool(request.value('jxnupl'))

    def process_request(self, request):
        token = (request.value('jxnupl') or '').strip()
        if token:
            request.uploaded_files = self.manager.read_from_temp_file(token)
        else:
            request.uploaded_files = self.manager.read_from_http_data(request)
        return True

    # errors are reported in the upload response, never raised
    def process_http_upload(self, request):
        response = UploadResponse()
        try:
            request.uploaded_files = self.manager.read_from_http_data(request)
            response.set_token(self.manager.save_to_temp_file(request.uploaded_files))
        except RequestError as e:
            logger.warning('upload failed: %s', e)
            response.set_error(str(e))
        request.response_manager.append(response)
        return True
