from django.utils.text import slugify
import os

# shared code

# Enumeration
#
# We need named constants in a few places (plugin capabilities,
# dispatch states, priority bands) and we want to be able to
# reference them as attributes, get a label back for logging,
# and test membership.
#
# Use this way:
#
#   STATES = Enumeration(
#           (0, 'IDLE'),
#           (1, 'RUNNING', 'running request'),
#       )
#
#   STATES.IDLE
#   >>> 0
#
# NOTE: if you pass a third element in each tuple, it will be
# stored as a "display" value, a human-readable form. Use the
# get_display() method to retrieve these.
#
class Enumeration(object):

    _enumerated_list = None
    _enumerated_dict = None
    _enumerated_display = None

    def __init__(self, *args, **kwargs):
        self._enumerated_list = kwargs.get('choices', args)

        self.choices = [ (t[0], t[1]) for t in self._enumerated_list ]

        # reverse each of the tuples and use them to build a dict,
        # indexed by name
        self._enumerated_dict = dict([ (t[1], t[0]) for t in self._enumerated_list ])

        # display labels indexed by value, falling back to the
        # programmatic label
        self._enumerated_display = dict([ (t[0], t[2] if len(t) > 2 else t[1]) for t in self._enumerated_list ])

    # look up an attribute, if it is not found elsewhere (we look
    # up the name in our set of enumerations)
    def __getattr__(self, attr):
        if attr.startswith('_') or attr not in self._enumerated_dict:
            # pretend we're a real attribute, and throw a similar exception,
            # instead of KeyError from a dict lookup
            raise AttributeError(attr)
        return self._enumerated_dict[attr]

    # look up a value to get the name
    # NOTE: returns None if no match is found
    def get_label(self, value):
        for t in self._enumerated_list:
            if t[0] == value:
                return t[1]
        return None

    # look up a value to get the display label
    # NOTE: returns None if no match is found
    def get_display(self, value):
        return self._enumerated_display.get(value, None)

    # we accept either the name or the number, but we need a
    # consistent way to get back to the number
    def get_value(self, label):
        if isinstance(label, str):
            return self._enumerated_dict[label]
        else:
            # already a value
            return label

    # the set of values, in declaration order
    def values(self):
        return [ t[0] for t in self._enumerated_list ]

    # methods to make the class iterable
    def __len__(self):
        return len(self._enumerated_list)

    def __iter__(self):
        return self._enumerated_list.__iter__()

    def __getitem__(self, key):
        return self._enumerated_list[key]

    def __setitem__(self, key, value):
        raise TypeError("'Enumeration' object does not support item assignment")

    def __delitem__(self, key):
        raise TypeError("'Enumeration' object does not support item assignment")

    # without this, 'in' tests by iterating, which isn't useful;
    # we want to test if a label is in the enumeration
    def __contains__(self, key):
        return key in self._enumerated_dict

# Python doesn't have an easy way to recursively merge
# dicts. So we recursively crawl the damn things and do
# it ourselves.
#
# http://stackoverflow.com/questions/7204805/dictionaries-of-dictionaries-merge/24837438#24837438
#
# NOTE: modifies dict1 in place as well as returns it.
# If you need to preserve it, use copy.deepcopy() on it
# first.
#
def merge_dicts(dict1, dict2):
    if not isinstance(dict1, dict) or not isinstance(dict2, dict):
        return dict2
    for k in dict2:
        if k in dict1:
            dict1[k] = merge_dicts(dict1[k], dict2[k])
        else:
            dict1[k] = dict2[k]
    return dict1

# look up a value in a tree of nested dicts using a dotted
# path ('core.upload.enabled'); returns the default if any
# segment is missing or is not a dict
def lookup_path(tree, path, default = None):
    node = tree
    for key in path.split('.'):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node

# slugify extension
#
# Django's slugify() is nice and robust, except that it drops /
# instead of replacing it with -
#
# NOTE: we call it jaxbridge_slugify instead of just slugify
# so that wherever it appears in code, it's crystal clear
# that it's NOT Django's slugify
#
def jaxbridge_slugify(value):
    return slugify(str(value).replace('/', '-'))

# list the python modules in a directory, in a predictable
# (alphabetical) order; when recursive, sub-directories are
# walked too and each entry comes back with the list of
# sub-directory names leading to it
#
# returns (subdirs, module_name, file_path) tuples
#
def find_modules(path, recursive = False):
    found = []
    for root, dirs, files in os.walk(path):
        dirs.sort()                                             # walk sub-directories in a consistent order
        if not recursive:
            del dirs[:]
        relative = os.path.relpath(root, path)
        subdirs = [] if relative == os.curdir else relative.split(os.sep)
        for f in sorted(files):
            if f != '__init__.py' and f.endswith('.py'):
                found.append((subdirs, f[:-3], os.path.join(root, f)))
    return found
