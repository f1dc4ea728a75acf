from jaxbridge.templating import render_js

import json

# keep the json from closing the script element it sits in
JSON_SCRIPT_ESCAPES = {
        ord('<'): '\\u003C',
        ord('>'): '\\u003E',
        ord('&'): '\\u0026',
    }

# the answer to a plain form post carrying files
#
# The form is posted to a hidden iframe, so the answer is an HTML
# page; the client library reads the res variable it defines:
#
#   res = { "code": "success", "upl": <token> }
#   res = { "code": "error", "msg": <message> }
#
# and, on success, sends the token with the call that follows.
#
class UploadResponse(object):
    content_type = 'text/html'

    def __init__(self, token = None):
        self.token = token
        self.message = None

    def set_token(self, token):
        self.token = token

    def set_error(self, message):
        self.message = message

    def get_result(self):
        if self.message is not None:
            return { 'code': 'error', 'msg': self.message }
        return { 'code': 'success', 'upl': self.token }

    def get_output(self):
        result = json.dumps(self.get_result()).translate(JSON_SCRIPT_ESCAPES)
        return render_js('jaxbridge/upload.html', { 'result': result })
