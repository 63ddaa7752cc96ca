# -*- test-case-name: txfinger.test.test_response -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Conversion between finger protocol lines and the bytes on the wire.

Request and response lines are handled as text.  Bytes which are not valid
UTF-8 are smuggled through with C{surrogateescape} so that a line can be
decoded and re-encoded (for example by a forwarding hop) without changing it.
"""

from typing import Union

CRLF = b"\r\n"
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def toBytes(line: Union[str, bytes]) -> bytes:
    """
    Encode a line for the wire, without a terminator.

    @param line: A line of text, or bytes which are passed through untouched.
    """
    if isinstance(line, bytes):
        return line
    return line.encode(ENCODING, ERRORS)


def fromBytes(data: bytes) -> str:
    """
    Decode a line received from the wire, dropping any trailing CR and LF.
    """
    return data.rstrip(CRLF).decode(ENCODING, ERRORS)
