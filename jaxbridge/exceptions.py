# exceptions raised by the bridge
#
# Registration problems (plugins, callables, config files) are
# ConfigurationError and are always fatal to the registration
# step; a half-registered bridge is not safe to serve from.
#
# Problems with an inbound request are RequestError; the
# dispatcher turns these into a well-formed JSON error payload
# so the browser always gets something it can parse.
#
# UploadError is a RequestError raised while validating or
# storing uploaded files. On the plain HTTP upload path it is
# captured and reported inside the upload response.

class BridgeError(Exception):
    pass

class ConfigurationError(BridgeError):
    pass

class RequestError(BridgeError):
    pass

# appending something that is neither a response nor a list
# of raw commands
class InvalidResponseData(RequestError):
    pass

class UploadError(RequestError):
    pass
