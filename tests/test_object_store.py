import re
from datetime import timedelta

import pytest
from botocore.stub import ANY, Stubber

from doktolib.errors import (
    DeleteFailed,
    LinkGenerationFailed,
    StorageUnavailable,
    UploadFailed,
)
from doktolib.services.file_classifier import FileCategory
from doktolib.services.object_store import ObjectStore, build_s3_client, build_storage_key

BUCKET = 'doktolib-medical-files'
KEY_PATTERN = re.compile(
    r'^medical-files/lab_results/patient-42/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\.pdf$'
)


@pytest.fixture
def s3_client():
    return build_s3_client('us-east-1', 'AKIDEXAMPLE', 'secret-example')


@pytest.fixture
def stubber(s3_client):
    with Stubber(s3_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def object_store(s3_client):
    return ObjectStore(client=s3_client, bucket=BUCKET)


def test_storage_key_layout():
    key = build_storage_key(FileCategory.LAB_RESULTS, 'patient-42', 'blood_lab.pdf')
    assert KEY_PATTERN.match(key)


def test_storage_key_keeps_extension_as_written():
    key = build_storage_key(FileCategory.OTHER, 'p1', 'Scan.JPG')
    assert key.startswith('medical-files/other/p1/')
    assert key.endswith('.JPG')


def test_storage_keys_never_collide():
    keys = {
        build_storage_key(FileCategory.LAB_RESULTS, 'patient-42', 'blood_lab.pdf')
        for _ in range(10000)
    }
    assert len(keys) == 10000


def test_upload_puts_encrypted_object_with_metadata(object_store, stubber):
    data = b'%PDF-1.4 test'
    stubber.add_response('put_object', {'ETag': '"abc"'}, {
        'Bucket': BUCKET,
        'Key': ANY,
        'Body': data,
        'ContentType': 'application/pdf',
        'ContentLength': len(data),
        'ServerSideEncryption': 'AES256',
        'Metadata': {
            'patient-id': 'patient-42',
            'category': 'lab_results',
            'original-name': 'blood_lab.pdf',
        },
    })

    key = object_store.upload(data, 'blood_lab.pdf', 'application/pdf', 'patient-42', FileCategory.LAB_RESULTS)

    assert KEY_PATTERN.match(key)


def test_upload_with_accented_filename(object_store, stubber):
    data = b'%PDF-1.4'
    stubber.add_response('put_object', {'ETag': '"abc"'}, {
        'Bucket': BUCKET,
        'Key': ANY,
        'Body': data,
        'ContentType': 'application/pdf',
        'ContentLength': len(data),
        'ServerSideEncryption': 'AES256',
        'Metadata': {
            'patient-id': 'patient-%C3%A9',
            'category': 'lab_results',
            'original-name': 'R%C3%A9sultats_labo.pdf',
        },
    })

    key = object_store.upload(data, 'Résultats_labo.pdf', 'application/pdf', 'patient-é', FileCategory.LAB_RESULTS)

    assert key.endswith('.pdf')


def test_upload_failure_is_not_retried(object_store, stubber):
    stubber.add_client_error('put_object', service_error_code='InternalError', http_status_code=500)

    with pytest.raises(UploadFailed) as excinfo:
        object_store.upload(b'data', 'blood_lab.pdf', 'application/pdf', 'patient-42', FileCategory.LAB_RESULTS)

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == 'Failed to upload file'


def test_temporary_link_is_presigned_for_ttl(object_store):
    key = 'medical-files/insurance/patient-42/card.png'
    url = object_store.generate_temporary_link(key, 3600)

    assert url.startswith('https://')
    assert BUCKET in url
    assert f'/{key}?' in url
    assert 'X-Amz-Expires=3600' in url
    assert 'X-Amz-Signature=' in url


def test_temporary_link_accepts_timedelta(object_store):
    url = object_store.generate_temporary_link('medical-files/other/p/x.txt', timedelta(minutes=5))
    assert 'X-Amz-Expires=300' in url


def test_delete_removes_object(object_store, stubber):
    key = 'medical-files/other/p/x.txt'
    stubber.add_response('delete_object', {}, {'Bucket': BUCKET, 'Key': key})
    object_store.delete(key)


def test_delete_failure(object_store, stubber):
    stubber.add_client_error('delete_object', service_error_code='AccessDenied', http_status_code=403)
    with pytest.raises(DeleteFailed):
        object_store.delete('medical-files/other/p/x.txt')


def test_unconfigured_store_raises_storage_unavailable():
    store = ObjectStore()
    assert not store.configured

    with pytest.raises(StorageUnavailable):
        store.upload(b'x', 'a.pdf', 'application/pdf', 'p', FileCategory.OTHER)
    with pytest.raises(StorageUnavailable):
        store.generate_temporary_link('medical-files/other/p/a.pdf')
    with pytest.raises(StorageUnavailable):
        store.delete('medical-files/other/p/a.pdf')


def test_link_generation_failure_is_typed(object_store, monkeypatch):
    from botocore.exceptions import NoCredentialsError

    def broken(*args, **kwargs):
        raise NoCredentialsError()

    monkeypatch.setattr(object_store.client, 'generate_presigned_url', broken)
    with pytest.raises(LinkGenerationFailed):
        object_store.generate_temporary_link('medical-files/other/p/a.pdf')


@pytest.mark.parametrize('config', [
    {},
    {'AWS_ACCESS_KEY_ID': 'AKID', 'AWS_S3_BUCKET': BUCKET},
    {'AWS_ACCESS_KEY_ID': 'AKID', 'AWS_SECRET_ACCESS_KEY': 'secret'},
])
def test_from_config_without_credentials_or_bucket_is_unconfigured(config):
    assert not ObjectStore.from_config(config).configured


def test_from_config_with_credentials():
    store = ObjectStore.from_config({
        'AWS_REGION': 'eu-west-3',
        'AWS_ACCESS_KEY_ID': 'AKID',
        'AWS_SECRET_ACCESS_KEY': 'secret',
        'AWS_S3_BUCKET': BUCKET,
        'S3_CONNECT_TIMEOUT': 2,
        'S3_READ_TIMEOUT': 10,
    })

    assert store.configured
    assert store.bucket == BUCKET
    assert store.client.meta.region_name == 'eu-west-3'
    assert store.client.meta.config.connect_timeout == 2
    assert store.client.meta.config.read_timeout == 10
