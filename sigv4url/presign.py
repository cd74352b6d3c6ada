#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 13:40:09 2026

@author: mike
"""
import dataclasses
import datetime
import logging
import urllib.parse
from typing import NamedTuple, Union

from urllib3 import HTTPHeaderDict

from . import canonical, signer, utils
from .exceptions import MalformedInputError
from .options import SigningOptions

logger = logging.getLogger(__name__)

#######################################################
### Parameters

s3_host = '{bucket}.s3.amazonaws.com'
s3_service = 's3'

security_token_param = 'X-Amz-Security-Token'
signature_param = 'X-Amz-Signature'

#######################################################
### Classes


class PresignedRequest(NamedTuple):
    """
    The presigned url together with the intermediate signing artifacts.
    """
    url: str
    canonical_request: str
    string_to_sign: str
    credential_scope: str
    signature: str


#######################################################
### Helper Functions


def _expires_seconds(expires) -> str:
    if isinstance(expires, datetime.timedelta):
        expires = expires.total_seconds()
    return str(int(expires))


def _presign_headers(headers, host: str) -> HTTPHeaderDict:
    """
    New header dict with Host set. Any host header passed in is dropped.
    """
    header_dict = utils.normalize_headers(headers)
    header_dict.discard('host')
    header_dict['Host'] = host
    return header_dict


def _serialize_query(params) -> str:
    pairs = [(name, value) for name, values in params.items() for value in values]
    return urllib.parse.urlencode(pairs, quote_via=urllib.parse.quote, safe=utils.unreserved)


#######################################################
### Functions


def presign_url(method: str, host: str, path: str, service: str, payload: Union[bytes, str, None]=None, options=None) -> PresignedRequest:
    """
    Create a presigned url and keep the artifacts that produced it.

    Parameters
    ----------
    method : str
        The HTTP method.
    host : str
        The host of the url. It is always a signed header.
    path : str
        The request path, e.g. /mqtt.
    service : str
        The AWS service name, e.g. iotdevicegateway.
    payload : bytes, str, or None
        The request body, or UNSIGNED_PAYLOAD.
    options : SigningOptions, mapping, or None
        See SigningOptions. double_escape defaults to True here.

    Returns
    -------
    PresignedRequest
    """
    opts = SigningOptions.from_mapping(options).with_defaults(double_escape=True)
    if not path.startswith('/'):
        path = '/' + path

    headers = _presign_headers(opts.headers, host)
    credential_scope = signer.create_credential_scope(opts.timestamp, opts.region, service)

    query = utils.parse_query(opts.query)
    query['X-Amz-Algorithm'] = [signer.ALGORITHM]
    query['X-Amz-Credential'] = [f'{opts.access_key}/{credential_scope}']
    query['X-Amz-Date'] = [utils.to_time(opts.timestamp)]
    query['X-Amz-Expires'] = [_expires_seconds(opts.expires)]
    query['X-Amz-SignedHeaders'] = [canonical.create_signed_headers(headers)]

    if opts.session_token and opts.sign_session_token:
        query[security_token_param] = [opts.session_token]

    canonical_request = canonical.create_canonical_request(method, path, query, headers, payload, opts.double_escape)
    logger.debug('CanonicalRequest:\n%s', canonical_request)

    string_to_sign = signer.create_string_to_sign(opts.timestamp, opts.region, service, canonical_request)
    signature = signer.create_signature(opts.secret_key, opts.timestamp, opts.region, service, string_to_sign)
    query[signature_param] = [signature]

    # An unsigned token goes after the signature; a signed one is not emitted
    query.pop(security_token_param, None)
    if opts.session_token and not opts.sign_session_token:
        query[security_token_param] = [opts.session_token]

    url = f'{opts.protocol}://{host}{path}?{_serialize_query(query)}'

    return PresignedRequest(url, canonical_request, string_to_sign, credential_scope, signature)


def create_presigned_url(method: str, host: str, path: str, service: str, payload: Union[bytes, str, None]=None, options=None) -> str:
    """
    Create a presigned url for any SigV4 service. See presign_url for the parameters.
    """
    return presign_url(method, host, path, service, payload, options).url


def presign_s3(object_key: str, options=None) -> PresignedRequest:
    """
    Presign an S3 object url. The bucket and method come from the options.

    Parameters
    ----------
    object_key : str
        The object key in the S3 bucket.
    options : SigningOptions, mapping, or None
        See SigningOptions. sign_session_token and double_escape are forced to True and False respectively.

    Returns
    -------
    PresignedRequest
    """
    opts = SigningOptions.from_mapping(options)
    if not opts.bucket:
        raise MalformedInputError('bucket must be assigned to presign an S3 url.')
    opts = dataclasses.replace(opts, sign_session_token=True, double_escape=False)

    path = '/' + urllib.parse.quote(object_key, safe='/' + utils.unreserved)

    return presign_url(
        opts.method,
        s3_host.format(bucket=opts.bucket),
        path,
        s3_service,
        canonical.UNSIGNED_PAYLOAD,
        opts,
        )


def create_presigned_s3_url(object_key: str, options=None) -> str:
    """
    Create a presigned url for an S3 object. See presign_s3 for the parameters.
    """
    return presign_s3(object_key, options).url
