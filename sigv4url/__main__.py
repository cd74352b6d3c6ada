#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Oct 20 09:05:44 2026

@author: mike
"""
import sys
import logging
import argparse

import orjson

from .presign import presign_url, presign_s3
from .options import SigningOptions
from .exceptions import SigningError

#######################################################
### Parser


def build_parser():
    parser = argparse.ArgumentParser(prog='sigv4url', description='Create SigV4 presigned urls. Credentials are read from the AWS_* environment variables.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log the canonical request and string to sign to stderr.')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--region', help='The AWS region.')
    common.add_argument('--expires', type=int, help='Seconds the url stays valid. Default 86400.')
    common.add_argument('--timestamp', help='ISO 8601 signing time. Default now.')
    common.add_argument('--query', help='Extra query string to include.')
    common.add_argument('--json', action='store_true', help='Print all signing artifacts as JSON.')

    subparsers = parser.add_subparsers(dest='command', required=True)

    s3 = subparsers.add_parser('s3', parents=[common], help='Presign an S3 object url.')
    s3.add_argument('key', help='The object key.')
    s3.add_argument('--bucket', help='The bucket. Default AWS_S3_BUCKET.')
    s3.add_argument('--method', help='The HTTP method. Default GET.')

    url = subparsers.add_parser('url', parents=[common], help='Presign a url for any service.')
    url.add_argument('method')
    url.add_argument('host')
    url.add_argument('path')
    url.add_argument('service')
    url.add_argument('--protocol', help='The url scheme. Default https.')
    url.add_argument('--sign-session-token', action='store_true', default=None, help='Put the session token into the signature.')
    url.add_argument('--no-double-escape', dest='double_escape', action='store_false', default=None, help='Do not percent-encode the path a second time.')

    return parser


#######################################################
### Main


def main(argv=None, environ=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s', stream=sys.stderr)

    overrides = dict(region=args.region, expires=args.expires, timestamp=args.timestamp, query=args.query)

    try:
        if args.command == 's3':
            options = SigningOptions.from_env(environ, bucket=args.bucket, method=args.method, **overrides)
            result = presign_s3(args.key, options)
        else:
            options = SigningOptions.from_env(environ, protocol=args.protocol, sign_session_token=args.sign_session_token, double_escape=args.double_escape, **overrides)
            result = presign_url(args.method, args.host, args.path, args.service, '', options)
    except SigningError as err:
        print(f'sigv4url: {err}', file=sys.stderr)
        return 2

    if args.json:
        sys.stdout.write(orjson.dumps(result._asdict(), option=orjson.OPT_INDENT_2).decode() + '\n')
    else:
        print(result.url)

    return 0


if __name__ == '__main__':
    sys.exit(main())
