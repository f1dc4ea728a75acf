# bridge error messages
#
# included as a separate file so that they are easily modifiable
# by people who are not necessarily Python experts; it also makes
# it very easy to replace and/or translate. Add your own module to
# JAXBRIDGE_MESSAGES with the same shape to override entries.
#
# Placeholders use %(name)s and are filled in from the parameters
# given to Translator.trans().
#
# Within each grouping, PLEASE keep the list alphabetized by name.

messages = {
        'errors': {
                'class': {
                        'invalid': 'The class %(name)s is not a callable class.',
                        'method': 'The method %(method)s is not exposed by the class %(class)s.',
                    },
                'config': {
                        'content': 'The config file %(path)s must contain a json object.',
                        'extension': 'The config file %(path)s has an unsupported extension.',
                        'file': 'The config file %(path)s cannot be read.',
                    },
                'dir': {
                        'invalid': 'The directory %(path)s does not exist.',
                        'module': 'The module %(name)s cannot be imported.',
                    },
                'function': {
                        'invalid': 'The function %(name)s is not callable.',
                    },
                'options': {
                        'invalid': 'Invalid options for the callable %(name)s.',
                    },
                'package': {
                        'config': 'The config of the package %(name)s must be a dict or a file path.',
                        'invalid': 'The class %(name)s is not a package.',
                    },
                'register': {
                        'duplicate': 'A callable named %(name)s is already registered.',
                        'frozen': 'Cannot register %(name)s once the client script has been generated.',
                        'invalid': 'The class %(name)s does not implement any plugin capability.',
                        'plugin': 'No plugin can register callables of type %(name)s (%(callable)s).',
                    },
                'request': {
                        'args': 'The request arguments are invalid.',
                        'callable': 'No callable is registered under the name %(name)s.',
                    },
                'response': {
                        'data': {
                                'invalid': 'The response data must be a response or a list of commands.',
                            },
                        'exception': 'An exception occurred.',
                    },
                'upload': {
                        'copy': 'The uploaded file %(name)s could not be saved.',
                        'dir': 'The upload directory %(path)s cannot be written.',
                        'extension': 'The extension of the file %(name)s is not allowed.',
                        'invalid': 'The uploaded file name %(name)s is not allowed.',
                        'max-size': 'The file %(name)s is too big.',
                        'min-size': 'The file %(name)s is too small.',
                        'record': 'The upload data could not be read.',
                        'temp': 'The upload data could not be saved.',
                        'token': 'The upload token is invalid or has expired.',
                        'type': 'The type of the file %(name)s is not allowed.',
                    },
            },
    }
