from sigv4url.canonical import UNSIGNED_PAYLOAD, create_canonical_request, create_canonical_uri, create_canonical_query_string, create_canonical_headers, create_signed_headers, create_canonical_payload
from sigv4url.signer import ALGORITHM, sign, get_signature_key, create_credential_scope, create_string_to_sign, create_signature, create_authorization_header, SigV4Auth
from sigv4url.presign import PresignedRequest, presign_url, presign_s3, create_presigned_url, create_presigned_s3_url
from sigv4url.options import SigningOptions
from sigv4url.utils import to_time, to_date
from sigv4url.exceptions import SigningError, MalformedInputError, MissingCredentialsError

__version__ = '0.1.0'
