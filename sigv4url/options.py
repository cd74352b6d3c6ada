#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 13:02:26 2026

@author: mike
"""
import os
import dataclasses
import datetime
from collections.abc import Mapping
from typing import Optional, Union

from .exceptions import MissingCredentialsError

#######################################################
### Parameters

default_region = 'us-east-1'
default_expires = 86400 # 24 hours
default_protocol = 'https'
default_method = 'GET'

env_names = {
    'access_key': 'AWS_ACCESS_KEY_ID',
    'secret_key': 'AWS_SECRET_ACCESS_KEY',
    'session_token': 'AWS_SESSION_TOKEN',
    'bucket': 'AWS_S3_BUCKET',
    }

#######################################################
### Options


@dataclasses.dataclass(frozen=True)
class SigningOptions:
    """
    Everything needed to presign a request besides the request itself.

    Instances are immutable. Use dataclasses.replace (or the with_defaults method) to derive new ones.

    Parameters
    ----------
    access_key : str
        The access key id also known as aws_access_key_id.
    secret_key : str
        The secret access key also known as aws_secret_access_key.
    session_token : str or None
        The temporary session token from STS.
    region : str
        The AWS region. Default us-east-1.
    timestamp : datetime.datetime, int, float, str, or None
        The signing time. None means now.
    expires : int or None
        How long the presigned url is valid in seconds. Default 86400.
    protocol : str
        The url scheme. Default https.
    headers : mapping or None
        Extra headers to sign. Host is always added.
    query : str, mapping, or None
        Extra query parameters, placed before the X-Amz-* parameters.
    sign_session_token : bool
        Put the session token into the canonical request (S3) rather than appending it after signing (IoT).
    double_escape : bool or None
        Percent-encode the path a second time. None means the default of the presign mode.
    method : str
        The HTTP method used by create_presigned_s3_url. Default GET.
    bucket : str or None
        The bucket used by create_presigned_s3_url.
    """
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    session_token: Optional[str] = None
    region: str = default_region
    timestamp: Union[datetime.datetime, int, float, str, None] = None
    expires: Optional[int] = None
    protocol: str = default_protocol
    headers: Optional[Mapping] = None
    query: Union[str, Mapping, None] = None
    sign_session_token: bool = False
    double_escape: Optional[bool] = None
    method: str = default_method
    bucket: Optional[str] = None

    @classmethod
    def from_mapping(cls, options):
        """
        Accept either a SigningOptions, a mapping of its field names, or None.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            names = {f.name for f in dataclasses.fields(cls)}
            unknown = set(options) - names
            if unknown:
                raise TypeError(f'Unknown signing options: {", ".join(sorted(unknown))}')
            return cls(**options)

        raise TypeError('options must be a SigningOptions, a mapping, or None.')

    @classmethod
    def from_env(cls, environ: Optional[Mapping]=None, **overrides):
        """
        Build options from AWS environment variables, with explicit overrides on top. Overrides that are None are ignored.

        Parameters
        ----------
        environ : mapping or None
            The environment to read. The default is os.environ.
        overrides
            SigningOptions fields.

        Returns
        -------
        SigningOptions
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        for field, env_name in env_names.items():
            value = environ.get(env_name)
            if value:
                kwargs[field] = value

        region = environ.get('AWS_REGION') or environ.get('AWS_DEFAULT_REGION')
        if region:
            kwargs['region'] = region

        kwargs.update({k: v for k, v in overrides.items() if v is not None})

        return cls.from_mapping(kwargs)

    def with_defaults(self, double_escape: bool=True):
        """
        Fill in the values that are resolved at call time: the timestamp (now), the expiry, and double_escape.

        Raises MissingCredentialsError when the access key or secret key is missing.
        """
        if not self.access_key or not self.secret_key:
            raise MissingCredentialsError('An access_key and a secret_key must be assigned.')

        changes = {}
        if self.timestamp is None:
            changes['timestamp'] = datetime.datetime.now(datetime.timezone.utc)
        if self.expires is None:
            changes['expires'] = default_expires
        if self.double_escape is None:
            changes['double_escape'] = double_escape
        if not self.region:
            changes['region'] = default_region
        if not self.protocol:
            changes['protocol'] = default_protocol

        return dataclasses.replace(self, **changes)
