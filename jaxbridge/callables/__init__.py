# server-side callables: the registry, the registration plugins
# for each callable type, and the base class for exposed classes

from jaxbridge.callables.base import CallableClass
from jaxbridge.callables.registry import CallableFunction, CallableObject, CallableRegistry
