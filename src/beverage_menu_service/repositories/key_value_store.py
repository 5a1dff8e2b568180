"""Key-value storage backends for locally persisted state.

Stores expose asynchronous get/set/remove of string values. Backend failures
are raised as StorageError; the repositories built on top decide how to
degrade.
"""

import logging
from abc import ABC, abstractmethod

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a storage backend cannot complete an operation."""


class KeyValueStore(ABC):
    """Abstract base class for string key-value stores."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageError: If the backend fails
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the backend fails
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error.

        Raises:
            StorageError: If the backend fails
        """
        pass


class DynamoDBKeyValueStore(KeyValueStore):
    """Key-value store backed by a DynamoDB table.

    The table uses ``key`` as partition key and keeps the payload in a
    ``value`` string attribute. Writes to the same key are last-write-wins.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize store.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    async def get(self, key: str) -> str | None:
        try:
            response = self.table.get_item(Key={"key": key})
        except ClientError as e:
            raise StorageError(f"Failed to read '{key}' from {self.table_name}: {e}") from e

        if "Item" not in response:
            return None

        return str(response["Item"]["value"])

    async def set(self, key: str, value: str) -> None:
        try:
            self.table.put_item(Item={"key": key, "value": value})
        except ClientError as e:
            raise StorageError(f"Failed to write '{key}' to {self.table_name}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            self.table.delete_item(Key={"key": key})
        except ClientError as e:
            raise StorageError(f"Failed to delete '{key}' from {self.table_name}: {e}") from e


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for development; nothing survives a restart."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)
