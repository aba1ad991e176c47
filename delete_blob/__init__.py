"""
Delete endpoint: removes the blob named by the last segment of the `blobUri` query parameter
"""
import logging
import azure.functions as func
from shared.blob_names import ValidationError, blob_name_from_uri, blob_uri_from_params
from shared.blob_storage import BlobStorage, get_blob_storage
from shared.results import HandlerResult


FAILURE_MESSAGE = "Failed to delete blob."


def delete(req: func.HttpRequest, storage: BlobStorage) -> HandlerResult:
    """
    Delete the blob and its snapshots. A blob that is already gone still counts as deleted.
    """
    try:
        blob_name = blob_name_from_uri(blob_uri_from_params(req.params))
        storage.delete(blob_name)
    except ValidationError as e:
        logging.warning(f"Delete request rejected: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE)
    except Exception as e:
        logging.error(f"Error deleting blob from Blob Storage: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE)

    return HandlerResult.success(f"Blob '{blob_name}' deleted successfully.")


def main(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("Deleting from Blob Storage...")

    try:
        storage = get_blob_storage()
    except Exception as e:
        logging.error(f"Error deleting blob from Blob Storage: storage client unavailable: {str(e)}")
        return HandlerResult.failure(FAILURE_MESSAGE).to_response()

    return delete(req, storage).to_response()
