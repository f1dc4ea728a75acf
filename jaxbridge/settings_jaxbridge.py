# default settings for jaxbridge
#
# Import these into your project settings (from
# jaxbridge.settings_jaxbridge import *) and override what you
# need afterwards. Anything missing from the project settings
# falls back to the values in this file.

# the bridge's own options tree; project settings may define a
# JAXBRIDGE_OPTIONS dict with the same shape and it will be
# merged over these defaults (see jaxbridge.config)
JAXBRIDGE_OPTIONS = {
    'core': {
        'request': {
            'uri': '',                  # where the browser sends requests; empty means the current page
            'mode': 'asynchronous',     # or 'synchronous'
            'method': 'POST',
        },
        'prefix': {
            'function': 'jaxon_',       # prepended to function stub names
            'class': 'Jaxon',           # prepended to class stub names
        },
        'debug': {
            'on': False,
        },
        'jquery': {
            'no_conflict': False,       # use jQuery instead of $ in generated selectors
        },
        'upload': {
            'enabled': True,
        },
    },
    'js': {
        'lib': {
            'uri': '',                  # where the client runtime is served from; empty means don't include it
        },
    },
    'upload': {
        'default': {
            'dir': None,                # defaults to MEDIA_ROOT/jaxbridge/
            'types': [],                # allowed MIME types; empty allows all
            'extensions': [],           # allowed extensions; empty allows all
            'max-size': 0,              # in bytes; 0 disables the check
            'min-size': 0,
            'token-lifetime': 3600,     # seconds a temp-file token stays valid
        },
        'files': {
            # per-field overrides, e.g.
            # 'avatar': { 'types': [ 'image/png' ], 'max-size': 1048576 },
        },
    },
}

# modules that provide message catalogs, merged in order; add
# your own to override or translate the core messages
JAXBRIDGE_MESSAGES = (
        'jaxbridge.messages',
    )

# dotted path to a function returning the process-wide Bridge
# used by the template tags; YOU MUST SET THIS if you use them
#JAXBRIDGE_FACTORY = 'my_app.ajax.make_bridge'
JAXBRIDGE_FACTORY = None

#
# debug-related settings
# NOTE: the defaults should ALWAYS BE OFF
#

# set this to True to echo all bridge requests/responses to
# the log
JAXBRIDGE_DUMP_INFO = False
