"""
Signed HTTP transport for DynamoDB control-plane requests
"""
import json
import logging
import sys
from threading import local
from typing import Dict, Mapping, Optional

import botocore.client
import botocore.session
from botocore.awsrequest import AWSPreparedRequest, AWSRequest
from botocore.hooks import first_non_none_response
from botocore.session import get_session

from pynamoadmin.constants import (
    CODE, DEFAULT_ENCODING, ERROR, HTTP_STATUS_CODE, MESSAGE, RESPONSE_METADATA, SERVICE_NAME)
from pynamoadmin.exceptions import VerboseClientError
from pynamoadmin.settings import get_settings_value

if sys.version_info >= (3, 8):
    from typing import Protocol
else:
    from typing_extensions import Protocol

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


class Transport(Protocol):
    def send(self, operation_name: str, body: bytes, table_name: Optional[str] = None) -> bytes:
        """
        Sends a serialized request body for `operation_name` and returns the raw response body.

        Raises :class:`~pynamoadmin.exceptions.VerboseClientError` when the service
        answers with an error, or a :class:`botocore.exceptions.BotoCoreError` when no
        answer could be read.
        """
        ...


def _error_response(status_code: int, headers: Mapping[str, str], content: bytes) -> Dict:
    try:
        data = json.loads(content)
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    # Extract error code from __type
    code = data.get('__type', '')
    if '#' in code:
        code = code.rsplit('#', 1)[1]
    return {
        ERROR: {
            MESSAGE: data.get('message', '') or data.get('Message', ''),
            CODE: code,
        },
        RESPONSE_METADATA: {
            HTTP_STATUS_CODE: status_code,
            'RequestId': headers.get('x-amzn-RequestId'),
        },
    }


class BotocoreTransport(object):
    """
    Signs requests with botocore's request signer and sends them over botocore's HTTP session.

    Retries are not handled here; see :mod:`pynamoadmin.retry`.
    """

    def __init__(self,
                 region: Optional[str] = None,
                 host: Optional[str] = None,
                 read_timeout_seconds: Optional[float] = None,
                 connect_timeout_seconds: Optional[float] = None,
                 max_pool_connections: Optional[int] = None,
                 extra_headers: Optional[Mapping[str, str]] = None) -> None:
        self._local = local()
        self._client = None
        self.region = region if region else get_settings_value('region')
        self.host = host if host else get_settings_value('host')

        if connect_timeout_seconds is not None:
            self._connect_timeout_seconds = connect_timeout_seconds
        else:
            self._connect_timeout_seconds = get_settings_value('connect_timeout_seconds')

        if read_timeout_seconds is not None:
            self._read_timeout_seconds = read_timeout_seconds
        else:
            self._read_timeout_seconds = get_settings_value('read_timeout_seconds')

        if max_pool_connections is not None:
            self._max_pool_connections = max_pool_connections
        else:
            self._max_pool_connections = get_settings_value('max_pool_connections')

        if extra_headers is not None:
            self._extra_headers = extra_headers
        else:
            self._extra_headers = get_settings_value('extra_headers')

    def __repr__(self) -> str:
        return "BotocoreTransport<{}>".format(self.client.meta.endpoint_url)

    @property
    def session(self) -> botocore.session.Session:
        """
        Returns a valid botocore session
        """
        # botocore client creation is not thread safe as of v1.2.5+ (see issue #153)
        if getattr(self._local, 'session', None) is None:
            self._local.session = get_session()
        return self._local.session

    @property
    def client(self):
        """
        Returns a botocore dynamodb client
        """
        # botocore has a known issue where it will cache empty credentials
        # https://github.com/boto/botocore/blob/4d55c9b4142/botocore/credentials.py#L1016-L1021
        # if the client does not have credentials, we create a new client
        # otherwise the client is permanently poisoned in the case of metadata service flakiness when using IAM roles
        if not self._client or (self._client._request_signer and not self._client._request_signer._credentials):
            config = botocore.client.Config(
                parameter_validation=False,
                connect_timeout=self._connect_timeout_seconds,
                read_timeout=self._read_timeout_seconds,
                max_pool_connections=self._max_pool_connections)
            self._client = self.session.create_client(SERVICE_NAME, self.region, endpoint_url=self.host, config=config)
        return self._client

    def _sign_request(self, request: AWSRequest) -> None:
        auth = self.client._request_signer.get_auth_instance(
            self.client._request_signer.signing_name,
            self.client._request_signer.region_name,
            self.client._request_signer.signature_version)
        auth.add_auth(request)

    def _create_prepared_request(self, operation_name: str, body: bytes) -> AWSPreparedRequest:
        metadata = self.client.meta.service_model.metadata
        headers = {
            'X-Amz-Target': '{}.{}'.format(metadata['targetPrefix'], operation_name),
            'Content-Type': 'application/x-amz-json-{}'.format(metadata['jsonVersion']),
        }
        request = AWSRequest(method='POST', url=self.client.meta.endpoint_url, data=body, headers=headers)
        self._sign_request(request)
        prepared_request = self.client._endpoint.prepare_request(request)
        if self._extra_headers is not None:
            prepared_request.headers.update(self._extra_headers)
        return prepared_request

    def send(self, operation_name: str, body: bytes, table_name: Optional[str] = None) -> bytes:
        # A new request for each call, including a new signature
        prepared_request = self._create_prepared_request(operation_name, body)

        # Implement the before-send event from botocore
        event_name = 'before-send.dynamodb.{}'.format(operation_name)
        event_responses = self.client._endpoint._event_emitter.emit(event_name, request=prepared_request)
        event_response = first_non_none_response(event_responses)

        if event_response is None:
            http_response = self.client._endpoint.http_session.send(prepared_request)
        else:
            http_response = event_response

        status_code = http_response.status_code
        content = http_response.content
        log.debug("%s returned status %s", operation_name, status_code)
        if status_code >= 300:
            verbose_properties = {
                'request_id': http_response.headers.get('x-amzn-RequestId'),
                'table_name': table_name,
            }
            raise VerboseClientError(
                _error_response(status_code, http_response.headers, content),
                operation_name,
                verbose_properties,
            )
        if isinstance(content, str):
            content = content.encode(DEFAULT_ENCODING)
        return content
