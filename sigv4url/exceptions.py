#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:12:03 2026

@author: mike
"""

#######################################################
### Exceptions


class SigningError(ValueError):
    """
    Base class for all errors raised while building SigV4 signing material.
    """


class MalformedInputError(SigningError):
    """
    Raised when an input (timestamp, query, headers, bucket) cannot be interpreted.
    """


class MissingCredentialsError(SigningError):
    """
    Raised when no access key or secret key was supplied.
    """
