#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 11:15:52 2026

@author: mike
"""
import hmac
import hashlib
import logging
import datetime
import urllib.parse
from typing import Dict, Optional, Union

from . import canonical
from .utils import to_time, to_date

logger = logging.getLogger(__name__)

#######################################################
### Parameters

ALGORITHM = 'AWS4-HMAC-SHA256'
TERMINATOR = 'aws4_request'

#######################################################
### Functions


def sign(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode('utf-8'), hashlib.sha256).digest()


def get_signature_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """
    Derive the signing key scoped to one date, region, and service. Every stage keys the next with its raw digest.
    """
    k_date = sign(('AWS4' + secret_key).encode('utf-8'), date_stamp)
    k_region = sign(k_date, region)
    k_service = sign(k_region, service)
    k_signing = sign(k_service, TERMINATOR)
    return k_signing


def create_credential_scope(timestamp, region: str, service: str) -> str:
    return '/'.join([to_date(timestamp), region, service, TERMINATOR])


def create_string_to_sign(timestamp, region: str, service: str, canonical_request: str) -> str:
    """
    Build the string to sign from the timestamp, the credential scope, and the hash of the canonical request.
    """
    string_to_sign = '\n'.join([
        ALGORITHM,
        to_time(timestamp),
        create_credential_scope(timestamp, region, service),
        hashlib.sha256(canonical_request.encode('utf-8')).hexdigest(),
        ])
    logger.debug('StringToSign:\n%s', string_to_sign)
    return string_to_sign


def create_signature(secret_key: str, timestamp, region: str, service: str, string_to_sign: str) -> str:
    """
    Sign the string to sign with the derived signing key.

    Parameters
    ----------
    secret_key : str
        The secret access key also known as aws_secret_access_key.
    timestamp : datetime.datetime, int, float, or str
        The request timestamp. Its date scopes the signing key.
    region : str
        The AWS region.
    service : str
        The AWS service name, e.g. s3.
    string_to_sign : str
        The output of create_string_to_sign.

    Returns
    -------
    str
        64 lowercase hex characters.
    """
    signing_key = get_signature_key(secret_key, to_date(timestamp), region, service)
    return hmac.new(signing_key, string_to_sign.encode('utf-8'), hashlib.sha256).hexdigest()


def create_authorization_header(access_key: str, scope: str, signed_headers: str, signature: str) -> str:
    """
    Format the Authorization header value.
    """
    return ', '.join([
        f'{ALGORITHM} Credential={access_key}/{scope}',
        f'SignedHeaders={signed_headers}',
        f'Signature={signature}',
        ])


#######################################################
### Header signing


class SigV4Auth:
    """
    Header based SigV4 signing of a request.
    """
    def __init__(self, access_key: str, secret_key: str, region: str='us-east-1', service: str='s3', session_token: Optional[str]=None):
        """
        Parameters
        ----------
        access_key : str
            The access key id also known as aws_access_key_id.
        secret_key : str
            The secret access key also known as aws_secret_access_key.
        region : str
            The AWS region. Default us-east-1.
        service : str
            The AWS service name. Default s3.
        session_token : str or None
            The temporary session token from STS, if any.
        """
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region
        self.service = service
        self.session_token = session_token

    def _payload_hash(self, headers: Dict[str, str], body):
        if body is None:
            return canonical.create_canonical_payload(b'')
        if isinstance(body, (bytes, str)):
            return canonical.create_canonical_payload(body)
        for name, value in headers.items():
            if name.lower() == 'x-amz-content-sha256':
                return value
        if hasattr(body, 'read') and hasattr(body, 'seek'):
            # For file-like objects, read to hash and seek back
            pos = body.tell()
            payload_hash = canonical.create_canonical_payload(body.read())
            body.seek(pos)
            return payload_hash

        return canonical.UNSIGNED_PAYLOAD

    def sign_headers(self, request_method: str, url: str, headers: Optional[Dict[str, str]]=None, body: Union[bytes, str, None]=None, timestamp=None) -> Dict[str, str]:
        """
        Calculates the AWS Signature Version 4 and returns a new headers dict that includes the Authorization header. The headers passed in are left untouched.

        Parameters
        ----------
        request_method : str
            The HTTP method.
        url : str
            The full request url including any query string.
        headers : dict or None
            Extra request headers. A passed x-amz-content-sha256 is kept and set to the payload hash that was signed.
        body : bytes, str, file-like, or None
            The request body.
        timestamp : datetime.datetime, int, float, str, or None
            The signing time. The default is now.

        Returns
        -------
        dict
        """
        if timestamp is None:
            timestamp = datetime.datetime.now(datetime.timezone.utc)

        _, host, path, query, _ = urllib.parse.urlsplit(url)

        headers = headers or {}
        payload_hash = self._payload_hash(headers, body)

        managed = ('authorization', 'host', 'x-amz-date', 'x-amz-security-token', 'x-amz-content-sha256')
        new_headers = {k: v for k, v in headers.items() if k.lower() not in managed}

        new_headers['host'] = host
        new_headers['x-amz-date'] = to_time(timestamp)
        if self.session_token:
            new_headers['x-amz-security-token'] = self.session_token
        # S3 always gets the payload hash header; other services keep it when the caller sent one
        if self.service == 's3' or any(k.lower() == 'x-amz-content-sha256' for k in headers):
            new_headers['x-amz-content-sha256'] = payload_hash

        # Sign host, x-amz-*, and content-length/type
        headers_to_sign = {}
        for k, v in new_headers.items():
            k_lower = k.lower()
            if k_lower == 'host' or k_lower.startswith('x-amz-') or k_lower in ('content-length', 'content-type'):
                headers_to_sign[k] = v

        canonical_request = '\n'.join([
            request_method.upper(),
            canonical.create_canonical_uri(path or '/', self.service != 's3'),
            canonical.create_canonical_query_string(query),
            canonical.create_canonical_headers(headers_to_sign),
            canonical.create_signed_headers(headers_to_sign),
            payload_hash,
            ])
        logger.debug('CanonicalRequest:\n%s', canonical_request)

        string_to_sign = create_string_to_sign(timestamp, self.region, self.service, canonical_request)
        signature = create_signature(self.secret_key, timestamp, self.region, self.service, string_to_sign)

        new_headers['Authorization'] = create_authorization_header(
            self.access_key,
            create_credential_scope(timestamp, self.region, self.service),
            canonical.create_signed_headers(headers_to_sign),
            signature,
            )

        return new_headers
