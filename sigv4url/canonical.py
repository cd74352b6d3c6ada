#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:48:17 2026

@author: mike
"""
import hashlib
from typing import Union

from . import utils

#######################################################
### Parameters

UNSIGNED_PAYLOAD = 'UNSIGNED-PAYLOAD'

#######################################################
### Functions


def create_canonical_uri(path: str, double_escape: bool=False) -> str:
    """
    Resolve a request path into its canonical form.

    Dot segments and empty segments are removed, a trailing slash on the input is kept, and an empty path becomes "/". With double_escape every segment is percent-encoded once more before resolving.

    Parameters
    ----------
    path : str
        The request path as it will appear in the URL.
    double_escape : bool
        Encode each path segment again. Needed by every service except S3.

    Returns
    -------
    str
    """
    if not path:
        return '/'

    if double_escape:
        path = '/'.join(utils.uri_encode(seg) for seg in path.split('/'))

    segments = []
    for seg in path.split('/'):
        if seg in ('', '.'):
            continue
        if seg == '..':
            if segments:
                segments.pop()
        else:
            segments.append(seg)

    uri = '/' + '/'.join(segments)
    if path.endswith('/') and not uri.endswith('/'):
        uri += '/'

    return uri


def create_canonical_query_string(query: utils.QueryInput) -> str:
    """
    Canonical query string: names and values percent-encoded, sorted by encoded name then encoded value.

    Parameters
    ----------
    query : str, mapping, or None
        Either a raw query string or a mapping of names to a value or a list of values.

    Returns
    -------
    str
    """
    params = utils.parse_query(query)

    pairs = sorted(
        (utils.uri_encode(name), utils.uri_encode(value))
        for name, values in params.items()
        for value in values
    )

    return '&'.join(f'{name}={value}' for name, value in pairs)


def _canonical_header_items(headers):
    header_dict = utils.normalize_headers(headers)
    items = []
    for name in header_dict:
        values = header_dict.getlist(name)
        items.append((name.lower(), ','.join(utils.collapse_whitespace(v) for v in values)))

    return sorted(items)


def create_canonical_headers(headers) -> str:
    """
    Canonical header block. Every line is "name:value" followed by a newline, names lowercased and sorted, multiple values joined with commas.
    """
    return ''.join(f'{name}:{value}\n' for name, value in _canonical_header_items(headers))


def create_signed_headers(headers) -> str:
    """
    The sorted, semicolon-joined, lowercase header names.
    """
    return ';'.join(name for name, _ in _canonical_header_items(headers))


def create_canonical_payload(payload: Union[bytes, str, None]) -> str:
    """
    Hex SHA-256 of the payload, or the unsigned payload marker verbatim.
    """
    if payload == UNSIGNED_PAYLOAD:
        return payload
    if payload is None:
        payload = b''
    elif isinstance(payload, str):
        payload = payload.encode('utf-8')

    return hashlib.sha256(payload).hexdigest()


def create_canonical_request(method: str, path: str, query: utils.QueryInput, headers, payload: Union[bytes, str, None], double_escape: bool=False) -> str:
    """
    Build the SigV4 canonical request.

    Parameters
    ----------
    method : str
        The HTTP method. It is uppercased.
    path : str
        The request path.
    query : str, mapping, or None
        The query string or a mapping of query parameters.
    headers : mapping
        The headers to sign. Values can be strings or lists of strings.
    payload : bytes, str, or None
        The request body, or UNSIGNED_PAYLOAD.
    double_escape : bool
        Percent-encode the path segments a second time.

    Returns
    -------
    str
    """
    return '\n'.join([
        method.upper(),
        create_canonical_uri(path, double_escape),
        create_canonical_query_string(query),
        create_canonical_headers(headers),
        create_signed_headers(headers),
        create_canonical_payload(payload),
        ])
