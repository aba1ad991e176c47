"""
Test configuration and fixtures.
Uses an in-memory stand-in for the Blob Storage container client.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("AZURE_KEY_VAULT_URL", None)

import pytest
from typing import Dict, Optional

import azure.functions as func
from azure.core.exceptions import HttpResponseError, ResourceExistsError, ResourceNotFoundError

from shared.blob_storage import BlobStorage


class FakeDownloader:
    def __init__(self, data: bytes):
        self._data = data

    def readall(self) -> bytes:
        return self._data


class FakeContainerClient:
    """Mimics the parts of azure.storage.blob.ContainerClient the app uses."""

    def __init__(self, container_name: str = "products", exists: bool = False):
        self.container_name = container_name
        self.exists = exists
        self.blobs: Dict[str, bytes] = {}
        self.snapshots: Dict[str, int] = {}
        self.create_calls = 0
        self.upload_calls = 0
        self.delete_calls = 0

    def create_container(self, **kwargs):
        self.create_calls += 1
        if self.exists:
            raise ResourceExistsError("The specified container already exists.")
        self.exists = True

    def upload_blob(self, name: str, data, overwrite: bool = False, **kwargs):
        self.upload_calls += 1
        if not self.exists:
            raise ResourceNotFoundError("The specified container does not exist.")
        if name in self.blobs and not overwrite:
            raise ResourceExistsError("The specified blob already exists.")
        if hasattr(data, "read"):
            data = data.read()
        self.blobs[name] = bytes(data)

    def delete_blob(self, blob: str, delete_snapshots: Optional[str] = None, **kwargs):
        self.delete_calls += 1
        if not self.exists or blob not in self.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        if self.snapshots.get(blob) and delete_snapshots != "include":
            raise HttpResponseError("This operation is not permitted because the blob has snapshots.")
        del self.blobs[blob]
        self.snapshots.pop(blob, None)

    def download_blob(self, blob: str, **kwargs) -> FakeDownloader:
        if not self.exists or blob not in self.blobs:
            raise ResourceNotFoundError("The specified blob does not exist.")
        return FakeDownloader(self.blobs[blob])

    def take_snapshot(self, blob: str):
        self.snapshots[blob] = self.snapshots.get(blob, 0) + 1


@pytest.fixture
def container_client() -> FakeContainerClient:
    """Container client for a container that does not exist yet."""
    return FakeContainerClient()


@pytest.fixture
def storage(container_client: FakeContainerClient) -> BlobStorage:
    """BlobStorage backed by the in-memory container client."""
    return BlobStorage(container_client)


@pytest.fixture
def upload_request():
    """Factory for POST requests against the upload function."""
    def make(body: bytes = b"", headers: Optional[Dict[str, str]] = None) -> func.HttpRequest:
        return func.HttpRequest(
            method="POST",
            url="/api/upload",
            headers=headers or {},
            params={},
            body=body,
        )
    return make


@pytest.fixture
def delete_request():
    """Factory for DELETE requests against the delete function."""
    def make(params: Optional[Dict[str, str]] = None) -> func.HttpRequest:
        return func.HttpRequest(
            method="DELETE",
            url="/api/delete",
            headers={},
            params=params or {},
            body=b"",
        )
    return make


@pytest.fixture(autouse=True)
def reset_blob_storage():
    """Drop the process-wide storage handle between tests."""
    import shared.blob_storage
    shared.blob_storage._blob_storage = None
    yield
    shared.blob_storage._blob_storage = None
