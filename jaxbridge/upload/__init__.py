# file uploads, directly with a call or in two steps

from jaxbridge.upload.file import UploadedFile
from jaxbridge.upload.manager import UploadManager
from jaxbridge.upload.plugin import UploadPlugin
from jaxbridge.upload.response import UploadResponse
