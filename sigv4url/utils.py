#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:20:41 2026

@author: mike
"""
import datetime
import urllib.parse
from collections.abc import Mapping
from typing import Dict, List, Union

from urllib3 import HTTPHeaderDict

from .exceptions import MalformedInputError

#######################################################
### Parameters

# RFC 3986 unreserved characters; quote() always keeps letters and digits
unreserved = '-_.~'

amz_date_format = '%Y%m%dT%H%M%SZ'

QueryInput = Union[str, Mapping, None]

#######################################################
### Helper Functions


def uri_encode(value) -> str:
    """
    Percent-encode a value the way SigV4 expects (UTF-8, only unreserved characters left as is).
    """
    return urllib.parse.quote(str(value), safe=unreserved)


def parse_timestamp(timestamp) -> datetime.datetime:
    """
    Convert a timestamp into an aware UTC datetime.

    Parameters
    ----------
    timestamp : datetime.datetime, int, float, or str
        A datetime (naive ones are taken as UTC), seconds since the epoch, an ISO 8601 string, or a compact string like 20130524T000000Z.

    Returns
    -------
    datetime.datetime
    """
    if isinstance(timestamp, datetime.datetime):
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=datetime.timezone.utc)
        return timestamp.astimezone(datetime.timezone.utc)

    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        try:
            return datetime.datetime.fromtimestamp(timestamp, datetime.timezone.utc)
        except (OverflowError, OSError, ValueError) as err:
            raise MalformedInputError(f'{timestamp} is not a valid epoch timestamp.') from err

    if isinstance(timestamp, str):
        text = timestamp.strip()
        try:
            return datetime.datetime.strptime(text, amz_date_format).replace(tzinfo=datetime.timezone.utc)
        except ValueError:
            pass
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.datetime.fromisoformat(text)
        except ValueError as err:
            raise MalformedInputError(f'{timestamp} is not an ISO 8601 timestamp.') from err
        return parse_timestamp(dt)

    raise MalformedInputError('timestamp must be a datetime, a number of seconds, or an ISO 8601 string.')


def to_time(timestamp) -> str:
    """
    Compact ISO 8601 UTC representation, e.g. 20130524T000000Z.
    """
    return parse_timestamp(timestamp).strftime(amz_date_format)


def to_date(timestamp) -> str:
    """
    The YYYYMMDD date of a timestamp.
    """
    return to_time(timestamp)[:8]


def _as_list(value) -> List[str]:
    if isinstance(value, (list, tuple)):
        return ['' if v is None else str(v) for v in value]
    if value is None:
        return ['']
    return [str(value)]


def parse_query(query: QueryInput) -> Dict[str, List[str]]:
    """
    Turn a raw query string or a mapping into a new ordered dict of name -> list of values.

    The input is never modified. Repeated names in a query string are collected in order of appearance.
    """
    params: Dict[str, List[str]] = {}
    if not query:
        return params

    if isinstance(query, str):
        try:
            pairs = urllib.parse.parse_qsl(query.lstrip('?'), keep_blank_values=True, errors='strict')
        except UnicodeDecodeError as err:
            raise MalformedInputError(f'Could not decode the query string: {query}') from err
        for name, value in pairs:
            params.setdefault(name, []).append(value)

    elif isinstance(query, Mapping):
        for name, value in query.items():
            params.setdefault(str(name), []).extend(_as_list(value))

    else:
        raise MalformedInputError('query must be either a query string or a mapping.')

    return params


def normalize_headers(headers) -> HTTPHeaderDict:
    """
    Copy a header mapping into an HTTPHeaderDict, expanding list values into multiple entries.

    Header names are trimmed. Names differing only in case end up under one key.
    """
    header_dict = HTTPHeaderDict()
    if not headers:
        return header_dict
    if not isinstance(headers, Mapping):
        raise MalformedInputError('headers must be a mapping of header names to values.')

    # Case variants of a name are merged in sorted order of the original names
    items = sorted(((str(name).strip(), value) for name, value in headers.items()), key=lambda item: item[0])
    for name, value in items:
        for v in _as_list(value):
            header_dict.add(name, v)

    return header_dict


def collapse_whitespace(value: str) -> str:
    return ' '.join(value.split())
