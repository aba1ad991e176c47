"""
Upload endpoint: writes the request body to a blob named by the `file-name` header
"""
import logging
import azure.functions as func
from shared.blob_names import ValidationError, file_name_from_headers
from shared.blob_storage import BlobStorage, get_blob_storage
from shared.results import HandlerResult


FAILURE_MESSAGE = "Failed to upload blob."


def upload(req: func.HttpRequest, storage: BlobStorage) -> HandlerResult:
    """
    Stream the request body to the named blob, overwriting any existing one
    """
    try:
        file_name = file_name_from_headers(req.headers)
        storage.upload(file_name, req.get_body(), overwrite=True)
    except ValidationError as e:
        logging.warning(f"Upload request rejected: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE)
    except Exception as e:
        logging.error(f"Error uploading to Blob Storage: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE)

    return HandlerResult.success(f"Blob '{file_name}' uploaded successfully.")


def main(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("Uploading to Blob Storage...")

    try:
        storage = get_blob_storage()
    except Exception as e:
        logging.error(f"Error uploading to Blob Storage: storage client unavailable: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE).to_response()

    return upload(req, storage).to_response()
