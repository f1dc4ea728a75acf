from django.template import Context, Engine

import os

# javascript emission
#
# The client code is rendered with a private template engine so
# that it never depends on the project's TEMPLATES setting, and
# with autoescaping off since the output is javascript, not HTML.
# Values are json-encoded by the callers before they are put in
# a context.

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')

_engine = None

def get_engine():
    global _engine
    if _engine is None:
        _engine = Engine(dirs = [ TEMPLATE_DIR ], autoescape = False)
    return _engine

def render_js(template_name, context = None):
    template = get_engine().get_template(template_name)
    return template.render(Context(context or {}, autoescape = False)).strip()
