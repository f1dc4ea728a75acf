import os

# an uploaded file, once it is in its final location
#
# The same record is built from a fresh upload (from_http_data())
# or from the json saved for a later request (from_temp_data());
# either way the callables see the same attributes:
#
#   type        the MIME type sent by the browser
#   name        the sanitized base name, without extension
#   filename    the file name sent by the browser
#   extension   the extension of that name, without the dot
#   size        in bytes
#   path        where the file is stored: <dir>/<name>.<extension>,
#               or <dir>/<name> when there is no extension
#
class UploadedFile(object):
    FIELDS = ('type', 'name', 'filename', 'extension', 'size', 'path')

    type = ''
    name = ''
    filename = ''
    extension = ''
    size = 0
    path = ''

    @classmethod
    def from_http_data(cls, upload_dir, http_file, name, extension):
        uploaded = cls()
        uploaded.type = http_file.content_type or ''
        uploaded.name = name
        uploaded.filename = http_file.name
        uploaded.extension = extension
        uploaded.size = http_file.size
        uploaded.path = os.path.join(upload_dir, '%s.%s' % (name, extension) if extension else name)
        return uploaded

    @classmethod
    def from_temp_data(cls, data):
        uploaded = cls()
        for field in cls.FIELDS:
            if field in data:
                setattr(uploaded, field, data[field])
        return uploaded

    def to_temp_data(self):
        return dict([ (field, getattr(self, field)) for field in self.FIELDS ])

    def __eq__(self, other):
        return isinstance(other, UploadedFile) and self.to_temp_data() == other.to_temp_data()

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return '<UploadedFile %s>' % self.path
