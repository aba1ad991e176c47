import logging
from typing import IO, Optional, Union
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient
from .config import config


# Keep the SDK request/response dumps out of the function logs
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)


class BlobStorage:
    """Blob operations scoped to a single container"""

    def __init__(self, container_client: ContainerClient):
        self.container_client = container_client
        self._container_ready = False

    @classmethod
    def from_connection_string(cls, connection_string: str, container_name: str) -> "BlobStorage":
        blob_service_client = BlobServiceClient.from_connection_string(connection_string)
        return cls(blob_service_client.get_container_client(container_name))

    @property
    def container_name(self) -> str:
        return self.container_client.container_name

    def ensure_container(self) -> None:
        """Create the container if it does not exist yet"""
        if self._container_ready:
            return
        try:
            self.container_client.create_container()
            logging.info(f"Created container '{self.container_name}'")
        except ResourceExistsError:
            pass
        self._container_ready = True

    def upload(self, blob_name: str, data: Union[bytes, IO[bytes]], overwrite: bool = True) -> None:
        """
        Write data to the named blob, replacing it when overwrite is set.
        If the container was removed since it was last seen, it is recreated and the write retried once.
        """
        self.ensure_container()
        start = data.tell() if hasattr(data, "seek") else None
        try:
            self.container_client.upload_blob(name=blob_name, data=data, overwrite=overwrite)
        except ResourceNotFoundError:
            logging.warning(f"Container '{self.container_name}' is missing, recreating it")
            self._container_ready = False
            self.ensure_container()
            if start is not None:
                data.seek(start)
            self.container_client.upload_blob(name=blob_name, data=data, overwrite=overwrite)
        logging.info(f"Uploaded blob '{blob_name}' to container '{self.container_name}'")

    def delete(self, blob_name: str) -> bool:
        """
        Delete the named blob together with its snapshots.
        Returns False when there was nothing to delete.
        """
        try:
            self.container_client.delete_blob(blob_name, delete_snapshots="include")
        except ResourceNotFoundError:
            logging.info(f"Blob '{blob_name}' not found in container '{self.container_name}', nothing to delete")
            return False
        logging.info(f"Deleted blob '{blob_name}' from container '{self.container_name}'")
        return True

    def download(self, blob_name: str) -> Optional[bytes]:
        try:
            return self.container_client.download_blob(blob_name).readall()
        except ResourceNotFoundError:
            return None


_blob_storage: Optional[BlobStorage] = None


def get_blob_storage() -> BlobStorage:
    """Return the process-wide storage handle, building it on first use"""
    global _blob_storage
    if _blob_storage is None:
        _blob_storage = BlobStorage.from_connection_string(
            config.storage_connection_string,
            config.storage_container_name
        )
    return _blob_storage
