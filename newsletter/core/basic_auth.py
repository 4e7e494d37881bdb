"""Basic Authentication — extracts a credential pair from an Authorization header.

Invariants:
    - Pure function: no IO, no logging of the decoded password
    - Missing header, non-Basic scheme, bad base64, non-UTF-8 payload and a
      payload without ':' all raise MalformedCredentialsError
    - Only the first ':' splits username from password (passwords may contain ':')
    - Exactly one space after "Basic"; extra or trailing whitespace is rejected
"""

import base64
import binascii
from dataclasses import dataclass, field

BASIC_PREFIX = "Basic "


class MalformedCredentialsError(ValueError):
    """Authorization header could not be turned into a credential pair."""


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


def parse_basic_auth(authorization: str | None) -> Credentials:
    """Decode `Basic <base64(username:password)>` into Credentials."""
    if authorization is None:
        raise MalformedCredentialsError("The 'Authorization' header was missing")

    if not authorization.startswith(BASIC_PREFIX):
        raise MalformedCredentialsError("The authorization scheme was not 'Basic'")
    encoded = authorization[len(BASIC_PREFIX):]

    try:
        decoded_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedCredentialsError(
            "Failed to base64-decode 'Basic' credentials",
        ) from e

    try:
        decoded = decoded_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedCredentialsError(
            "The decoded credential string is not valid UTF-8",
        ) from e

    username, separator, password = decoded.partition(":")
    if not separator:
        raise MalformedCredentialsError(
            "A password must be provided in 'Basic' authorization",
        )
    return Credentials(username=username, password=password)
