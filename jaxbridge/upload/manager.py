from django.conf import settings
from django.core import signing
from django.utils.crypto import get_random_string

from jaxbridge.common import jaxbridge_slugify
from jaxbridge.exceptions import RequestError, UploadError
from jaxbridge.upload.file import UploadedFile

import json
import logging
import os
import time

logger = logging.getLogger('jaxbridge.upload')

# storing uploaded files
#
# Files are checked against the upload options of their field
# (upload.files.<field>.*, falling back to upload.default.*), then
# written to a sub-directory of the upload directory with a random
# name, one per batch. Nothing is written unless every file passes.
#
# For the two-step upload, the list of stored files is saved as
# json in <default upload dir>/tmp/ and the browser gets a signed
# token naming that file. The token expires after the configured
# token lifetime.
#
# NOTE: reading a token does not consume it. The same token can be
# read again, with the same result, until purge_temp_files()
# removes its file.
#
class UploadManager(object):
    TOKEN_SALT = 'jaxbridge.upload'

    def __init__(self, bridge):
        self.bridge = bridge
        self.config = bridge.config
        self.translator = bridge.translator
        self.sanitizer = jaxbridge_slugify

    # the function that turns a file name (without extension) into
    # the name it is stored under
    def set_sanitizer(self, sanitizer):
        self.sanitizer = sanitizer

    def get_option(self, field, option):
        value = self.config.get_option('upload.files.%s.%s' % (field, option))
        if value is None:
            value = self.config.get_option('upload.default.%s' % option)
        return value

    def get_upload_dir(self, field = None):
        path = self.get_option(field, 'dir') if field else self.config.get_option('upload.default.dir')
        if not path:
            path = os.path.join(settings.MEDIA_ROOT, 'jaxbridge')
        try:
            os.makedirs(path, exist_ok = True)
        except OSError:
            raise UploadError(self.translator.trans('errors.upload.dir', { 'path': path }))
        if not os.access(path, os.W_OK):
            raise UploadError(self.translator.trans('errors.upload.dir', { 'path': path }))
        return path

    def get_temp_dir(self):
        path = os.path.join(self.get_upload_dir(), 'tmp')
        try:
            os.makedirs(path, exist_ok = True)
        except OSError:
            raise UploadError(self.translator.trans('errors.upload.dir', { 'path': path }))
        return path

    def validate(self, field, http_file, extension):
        params = { 'name': http_file.name }
        types = self.get_option(field, 'types')
        if types and http_file.content_type not in types:
            raise UploadError(self.translator.trans('errors.upload.type', params))
        extensions = self.get_option(field, 'extensions')
        if extensions and extension.lower() not in [ e.lower() for e in extensions ]:
            raise UploadError(self.translator.trans('errors.upload.extension', params))
        max_size = self.get_option(field, 'max-size')
        if max_size and http_file.size > max_size:
            raise UploadError(self.translator.trans('errors.upload.max-size', params))
        min_size = self.get_option(field, 'min-size')
        if min_size and http_file.size < min_size:
            raise UploadError(self.translator.trans('errors.upload.min-size', params))

    # the stored name must stay a plain file name, whatever the
    # sanitizer returns
    def sanitize(self, filename):
        name = self.sanitizer(filename)
        if not name or name in ('.', '..') or name != os.path.basename(name) or '\\' in name:
            raise UploadError(self.translator.trans('errors.upload.invalid', { 'name': filename }))
        return name

    # check, then store the files of a request
    #
    # returns a dict of field name to a list of UploadedFile
    #
    def read_from_http_data(self, request):
        batch = get_random_string(16)
        pending = []
        files = {}
        for field, http_files in request.files.items():
            upload_dir = os.path.join(self.get_upload_dir(field), batch)
            for http_file in http_files:
                base, extension = os.path.splitext(os.path.basename(http_file.name))
                extension = extension[1:]
                self.validate(field, http_file, extension)
                uploaded = UploadedFile.from_http_data(upload_dir, http_file, self.sanitize(base), extension)
                files.setdefault(field, []).append(uploaded)
                pending.append((http_file, uploaded))

        for http_file, uploaded in pending:
            self.store(http_file, uploaded)
        return files

    def store(self, http_file, uploaded):
        try:
            os.makedirs(os.path.dirname(uploaded.path), exist_ok = True)
            with open(uploaded.path, 'wb+') as destination:
                for chunk in http_file.chunks():
                    destination.write(chunk)
        except (IOError, OSError):
            logger.error('could not store %s', uploaded.path, exc_info = True)
            raise UploadError(self.translator.trans('errors.upload.copy', { 'name': uploaded.filename }))
        logger.info('stored upload %s (%d bytes)', uploaded.path, uploaded.size)

    # save the list of files for a later request; returns the token
    def save_to_temp_file(self, files):
        name = get_random_string(32)
        data = dict([ (field, [ f.to_temp_data() for f in field_files ]) for field, field_files in files.items() ])
        path = os.path.join(self.get_temp_dir(), name + '.json')
        try:
            with open(path, 'w') as f:
                json.dump(data, f)
        except (IOError, OSError):
            raise UploadError(self.translator.trans('errors.upload.temp'))
        return signing.dumps(name, salt = self.TOKEN_SALT)

    # the list of files saved under a token
    def read_from_temp_file(self, token):
        max_age = self.config.get_option('upload.default.token-lifetime')
        try:
            name = signing.loads(token, salt = self.TOKEN_SALT, max_age = max_age or None)
        except signing.BadSignature:
            raise RequestError(self.translator.trans('errors.upload.token'))

        path = os.path.join(self.get_temp_dir(), '%s.json' % name)
        if not os.path.exists(path):
            logger.warning('upload token %s refers to a missing file', name)
            return {}
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            return dict([ (field, [ UploadedFile.from_temp_data(item) for item in items ]) for field, items in data.items() ])
        except (IOError, OSError, ValueError, KeyError, TypeError, AttributeError):
            logger.warning('upload token %s refers to an unreadable file', name)
            raise UploadError(self.translator.trans('errors.upload.record'))

    # remove the temp files older than max_age seconds (by default,
    # the token lifetime); returns how many were removed
    def purge_temp_files(self, max_age = None):
        if max_age is None:
            max_age = self.config.get_option('upload.default.token-lifetime')
        limit = time.time() - max_age
        temp_dir = self.get_temp_dir()
        count = 0
        for f in os.listdir(temp_dir):
            path = os.path.join(temp_dir, f)
            if f.endswith('.json') and os.path.getmtime(path) <= limit:
                os.remove(path)
                count += 1
        logger.info('purged %d upload temp files', count)
        return count
