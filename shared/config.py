"""
Configuration management for the blob functions
"""
import json
import logging
import os
from typing import Optional
from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient


DEFAULT_CONTAINER_NAME = 'products'


class Config:
    """Configuration manager for Azure services"""

    def __init__(self):
        self.environment = os.getenv('ENVIRONMENT', 'development')
        self._load_local_settings()

        # Key Vault is optional, app settings are used when it is absent
        key_vault_url = os.getenv('AZURE_KEY_VAULT_URL')
        if key_vault_url:
            try:
                self.credential = DefaultAzureCredential()
                self.key_vault_client = SecretClient(
                    vault_url=key_vault_url,
                    credential=self.credential
                )
            except Exception:
                self.key_vault_client = None
        else:
            self.key_vault_client = None

    def _load_local_settings(self):
        """Load local.settings.json Values for local development, never overriding the environment"""
        settings_file = 'local.settings.json'
        paths_to_try = [
            os.path.join(os.getcwd(), settings_file),
            os.path.join(os.path.dirname(__file__), '..', settings_file)
        ]

        for path in paths_to_try:
            if os.path.exists(path):
                try:
                    with open(path, 'r') as f:
                        settings = json.load(f)
                except (OSError, ValueError) as e:
                    logging.warning(f"Could not read {path}: {str(e)}")
                    continue
                for key, value in settings.get('Values', {}).items():
                    if key not in os.environ:
                        os.environ[key] = str(value)
                return

    def get_secret(self, secret_name: str) -> Optional[str]:
        """Get secret from Key Vault or environment variables"""
        if self.key_vault_client:
            try:
                secret = self.key_vault_client.get_secret(secret_name)
                return secret.value
            except Exception:
                return os.getenv(secret_name)
        return os.getenv(secret_name)

    def _get_required_config(self, *keys: str, default: Optional[str] = None) -> str:
        """Get the first configured value among keys, or fail naming the primary key"""
        for key in keys:
            value = self.get_secret(key) or os.getenv(key)
            if value:
                return str(value)
        if default is None:
            raise ValueError(f"Required configuration '{keys[0]}' is not set")
        return default

    @property
    def storage_connection_string(self) -> str:
        return self._get_required_config('AzureWebJobsStorage', 'AZURE_STORAGE_CONNECTION_STRING')

    @property
    def storage_container_name(self) -> str:
        return self._get_required_config('BLOB_CONTAINER_NAME', default=DEFAULT_CONTAINER_NAME)


# Global config instance
config = Config()
