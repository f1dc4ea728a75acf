from django.conf import settings
from django.utils.translation import gettext

from jaxbridge import settings_jaxbridge
from jaxbridge.common import merge_dicts, lookup_path

import copy
import importlib

# collect up all the messages from configured modules and make
# them available
#
def collect_messages():
    messages = {}
    for module_name in getattr(settings, 'JAXBRIDGE_MESSAGES', settings_jaxbridge.JAXBRIDGE_MESSAGES):
        m = importlib.import_module(module_name)
        merge_dicts(messages, copy.deepcopy(m.messages))
    return messages

# message lookup for error reporting
#
# trans() takes a dotted key ('errors.register.invalid') and a
# dict of parameters for the %(name)s placeholders. The message
# is run through gettext first so that projects using Django's
# translation machinery can still translate the catalog text.
#
# NOTE: an unknown key comes back as the key itself; a missing
# message should never be the reason an error can't be reported
#
class Translator(object):

    def __init__(self, messages = None):
        self.messages = messages if messages is not None else collect_messages()

    def trans(self, key, params = None):
        message = lookup_path(self.messages, key)
        if not isinstance(message, str):
            return key
        message = gettext(message)
        if params:
            message = message % params
        return message
