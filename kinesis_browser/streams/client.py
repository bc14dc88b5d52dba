"""
Stream service client.

``KinesisStreamClient`` wraps the boto3 ``kinesis`` client behind the small
set of calls the browser needs. Every botocore failure is re-raised as a
``StreamClientError`` so callers only have one exception family to handle.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from kinesis_browser.config import BrowserConfig, StartPosition
from kinesis_browser.streams.records import StreamRecord

logger = logging.getLogger(__name__)


class StreamClientError(Exception):
    """Raised when a call to the stream service fails."""


class NoShardError(StreamClientError):
    """Raised when a stream has no shards to read from."""

    def __init__(self, stream_name: str) -> None:
        self.stream_name = stream_name
        super().__init__(f"no shard found for stream {stream_name!r}")


class StreamClient(Protocol):
    """Operations the browsing engine consumes from the stream service."""

    def list_streams(self) -> list[str]: ...

    def list_shards(self, stream_name: str) -> list[str]: ...

    def get_iterator(
        self, shard_id: str, stream_name: str, position: StartPosition
    ) -> str: ...

    def get_records(self, iterator: str) -> tuple[list[StreamRecord], str | None]: ...

    def put_record(self, stream_name: str, payload: bytes) -> str: ...


class KinesisStreamClient:
    """StreamClient backed by a boto3 Kinesis client."""

    def __init__(self, kinesis_client: Any, config: BrowserConfig) -> None:
        self.kinesis_client = kinesis_client
        self.config = config

    @classmethod
    def from_config(cls, config: BrowserConfig) -> "KinesisStreamClient":
        """Create the boto3 session and client described by ``config``.

        Raises:
            StreamClientError: If the session or client cannot be created
                (unknown profile, missing region, ...).
        """
        try:
            session = boto3.Session(
                profile_name=config.profile, region_name=config.region
            )
            kinesis_client = session.client(
                "kinesis", endpoint_url=config.endpoint_url
            )
        except BotoCoreError as e:
            raise StreamClientError(f"cannot create kinesis client: {e}") from e
        logger.debug(
            "Kinesis client created for region %s", kinesis_client.meta.region_name
        )
        return cls(kinesis_client, config)

    def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return getattr(self.kinesis_client, operation)(**kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            raise StreamClientError(f"{operation} failed ({code}): {e}") from e
        except BotoCoreError as e:
            raise StreamClientError(f"{operation} failed: {e}") from e

    def list_streams(self) -> list[str]:
        """Return the names of every stream visible to the credentials."""
        names: list[str] = []
        try:
            paginator = self.kinesis_client.get_paginator("list_streams")
            for page in paginator.paginate():
                names.extend(page.get("StreamNames", []))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            raise StreamClientError(f"list_streams failed ({code}): {e}") from e
        except BotoCoreError as e:
            raise StreamClientError(f"list_streams failed: {e}") from e
        return names

    def list_shards(self, stream_name: str) -> list[str]:
        """Return shard ids of ``stream_name`` in service order.

        Raises:
            NoShardError: If the stream has no shards.
        """
        shard_ids: list[str] = []
        response = self._call("list_shards", StreamName=stream_name)
        while True:
            shard_ids.extend(shard["ShardId"] for shard in response.get("Shards", []))
            next_token = response.get("NextToken")
            if not next_token:
                break
            # StreamName must not be sent together with NextToken
            response = self._call("list_shards", NextToken=next_token)

        if not shard_ids:
            raise NoShardError(stream_name)
        return shard_ids

    def get_iterator(
        self, shard_id: str, stream_name: str, position: StartPosition
    ) -> str:
        """Acquire a shard iterator at ``position``."""
        response = self._call(
            "get_shard_iterator",
            StreamName=stream_name,
            ShardId=shard_id,
            ShardIteratorType=position.value,
        )
        return response["ShardIterator"]

    def get_records(self, iterator: str) -> tuple[list[StreamRecord], str | None]:
        """Fetch one page of records.

        Returns:
            The records of the page and the iterator for the next page, which
            is None once the shard is closed and fully read.
        """
        response = self._call(
            "get_records",
            ShardIterator=iterator,
            Limit=self.config.records_per_page,
        )
        records = [StreamRecord.from_response(r) for r in response.get("Records", [])]
        return records, response.get("NextShardIterator")

    def put_record(self, stream_name: str, payload: bytes) -> str:
        """Publish ``payload`` and return its sequence number."""
        response = self._call(
            "put_record",
            StreamName=stream_name,
            Data=payload,
            PartitionKey=self.config.partition_key,
        )
        return response["SequenceNumber"]
