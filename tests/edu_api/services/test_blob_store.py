from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from edu_api.core.errors import UploadError
from edu_api.services.blob_store import S3BlobStore, build_object_key


def test_build_object_key_prefixes_utc_timestamp() -> None:
    key = build_object_key('notes.txt', datetime(2026, 3, 1, 12, 0, 0, 5000, tzinfo=timezone.utc))

    assert key == '2026-03-01T12:00:00.005Z-notes.txt'


def test_build_object_key_normalizes_to_utc() -> None:
    offset = timezone(timedelta(hours=2))

    key = build_object_key('notes.txt', datetime(2026, 3, 1, 14, 0, tzinfo=offset))

    assert key == '2026-03-01T12:00:00.000Z-notes.txt'


@pytest.mark.parametrize('filename', ['../../etc/passwd', 'C:\\Users\\me\\passwd', 'dir/passwd'])
def test_build_object_key_drops_client_directories(filename: str) -> None:
    key = build_object_key(filename, datetime(2026, 3, 1, tzinfo=timezone.utc))

    assert key.endswith('Z-passwd')
    assert '/' not in key


def test_upload_puts_object_and_returns_url() -> None:
    client = MagicMock()
    store = S3BlobStore(bucket='assignment-api-bucket', region='eu-central-1', client=client)

    url = store.upload('2026-03-01T12:00:00.000Z-my notes.txt', b'hello', 'text/plain')

    client.put_object.assert_called_once_with(
        Bucket='assignment-api-bucket',
        Key='2026-03-01T12:00:00.000Z-my notes.txt',
        Body=b'hello',
        ContentType='text/plain',
    )
    assert url == (
        'https://assignment-api-bucket.s3.eu-central-1.amazonaws.com/'
        '2026-03-01T12%3A00%3A00.000Z-my%20notes.txt'
    )


def test_upload_uses_endpoint_override_in_url() -> None:
    client = MagicMock()
    store = S3BlobStore(
        bucket='bucket',
        region='eu-central-1',
        endpoint_url='http://localhost:4566/',
        client=client,
    )

    assert store.upload('key.txt', b'data') == 'http://localhost:4566/bucket/key.txt'
    assert 'ContentType' not in client.put_object.call_args.kwargs


def test_upload_translates_client_errors() -> None:
    client = MagicMock()
    client.put_object.side_effect = ClientError(
        {'Error': {'Code': 'AccessDenied', 'Message': 'Access Denied'}},
        'PutObject',
    )
    store = S3BlobStore(bucket='bucket', region='eu-central-1', client=client)

    with pytest.raises(UploadError) as exception_info:
        store.upload('key.txt', b'data')

    assert exception_info.value.message == 'Failed to upload file to S3.'
