# callables used by the tests, imported by dotted path

from jaxbridge import Bridge, CallableClass, Package, RequestError, Response

NOT_CALLABLE = 42

def say_hello(response, name):
    response.alert('Hello %s' % name)

def add(response, a, b):
    response.set_return_value(a + b)

# answers with a response of its own
def make_response(response):
    other = Response()
    other.html('result', 'from another response')
    other.set_return_value(0)
    return other

def refuse(response):
    raise RequestError('refused')

def crash(response):
    raise ValueError('boom')

class Calendar(CallableClass):
    setups = 0

    def setup(self):
        self.setups += 1

    def show(self, year, month):
        self.response.html('calendar', '%s-%s' % (year, month))

    def count_views(self):
        bag = self.response.bag('calendar')
        bag.set('views', bag.get('views', 0) + 1)

    def read_files(self):
        self.response.set_return_value(dict([ (field, [ f.to_temp_data() for f in files ]) for field, files in self.files.items() ]))

    def helper(self):
        pass

    def _private(self):
        pass

class SamplePackageClass(CallableClass):

    def home(self):
        self.response.debug('registered by a package')

class SamplePackage(Package):

    @classmethod
    def config(cls):
        return {
                'classes': [
                    'sample_callables.SamplePackageClass',
                ],
            }

    def ready_script(self):
        return 'jaxon.samplePackage.init();'

    def get_html(self):
        return '<div id="sample-package"></div>'

class BadConfigPackage(Package):

    @classmethod
    def config(cls):
        return True

# the process-wide bridge of the tests
def make_bridge():
    bridge = Bridge()
    bridge.register('function', 'sample_callables.say_hello')
    return bridge
