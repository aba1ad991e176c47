"""
Blob name extraction from incoming requests
"""
from typing import Mapping, Optional
from urllib.parse import unquote, urlparse


FILE_NAME_HEADER = 'file-name'
BLOB_URI_PARAM = 'blobUri'


class ValidationError(ValueError):
    """Request is missing or carries an unusable blob identifier"""


def file_name_from_headers(headers: Mapping[str, str]) -> str:
    """
    Return the blob name carried by the `file-name` header.
    The functions host lower-cases header names, so the lookup is case-insensitive.
    """
    file_name = headers.get(FILE_NAME_HEADER)
    if file_name is None:
        raise ValidationError("File name is missing in the request headers.")

    file_name = file_name.strip()
    if not file_name:
        raise ValidationError("Invalid file name.")
    return file_name


def blob_uri_from_params(params: Mapping[str, str]) -> str:
    blob_uri = params.get(BLOB_URI_PARAM)
    if not blob_uri or not blob_uri.strip():
        raise ValidationError("Blob URI is missing from the query string.")
    return blob_uri.strip()


def blob_name_from_uri(blob_uri: Optional[str]) -> str:
    """
    Return the last path segment of an absolute blob URI, percent-decoded.

    Only the final segment is used, so
    https://acct.blob.core.windows.net/products/folder/a.txt yields 'a.txt'.
    """
    if not blob_uri:
        raise ValidationError("Blob URI is missing from the query string.")

    parsed = urlparse(blob_uri)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"Blob URI '{blob_uri}' is not an absolute URI.")

    blob_name = unquote(parsed.path.rsplit('/', 1)[-1])
    if not blob_name:
        raise ValidationError(f"Blob URI '{blob_uri}' does not name a blob.")
    # An encoded slash would address a blob outside the last segment
    if '/' in blob_name:
        raise ValidationError(f"Blob URI '{blob_uri}' has an encoded '/' in its last segment.")
    return blob_name
