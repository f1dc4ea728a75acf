from django import template
from django.utils.safestring import mark_safe

from jaxbridge.bridge import get_bridge

register = template.Library()

# the client code of the process-wide bridge
#
#   {% load jaxbridge %}
#   <head>
#       {% jaxbridge_css %}
#       {% jaxbridge_js %}
#   </head>
#   <body>
#       ...
#       {% jaxbridge_script %}
#   </body>

@register.simple_tag
def jaxbridge_css():
    return mark_safe(get_bridge().get_css())

@register.simple_tag
def jaxbridge_js():
    return mark_safe(get_bridge().get_js())

# NOTE: the csrf token is only included when the template is
# rendered with the request in its context
@register.simple_tag(takes_context = True)
def jaxbridge_script(context, include_js = False, include_css = False):
    return mark_safe(get_bridge().get_script(include_js, include_css, context.get('request')))
