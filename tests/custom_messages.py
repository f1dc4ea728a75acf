# a message module overriding one of the core messages

messages = {
        'errors': {
                'response': {
                        'exception': 'Something went wrong.',
                    },
            },
    }
