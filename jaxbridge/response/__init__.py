# the response side of the bridge: the command buffer, the global
# response of a request, and the response plugins

from jaxbridge.response.response import Response, ResponseEncoder
from jaxbridge.response.manager import ResponseManager
