# -*- test-case-name: txfinger.test.test_request -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Parsing of finger query lines (RFC 1288, section 2.3).

A query looks like::

    [/W ]<username>[@<host>[@<host>...]]

Any line at all is a valid query: there is no such thing as a parse error,
only requests with an empty username or an empty host chain.
"""

import re
from typing import Tuple

import attr

_VERBOSE = re.compile(r"/W\s+")


@attr.s(frozen=True, auto_attribs=True)
class Request:
    """
    A parsed finger query.

    @ivar raw: The query line as received, without its line terminator.
    @ivar verbose: Whether the query carried the C{/W} prefix.
    @ivar username: The user being asked about.  Empty for a listing
        request.
    @ivar hostnames: The forward chain, read left to right.  The last host
        is the next one to be asked.
    """

    raw: str
    verbose: bool = False
    username: str = ""
    hostnames: Tuple[str, ...] = ()

    @classmethod
    def fromLine(cls, line: str) -> "Request":
        """
        Parse C{line}.  See L{parseRequest}.
        """
        return parseRequest(line)

    @property
    def listingRequest(self) -> bool:
        """
        C{True} if this query asks for the list of users rather than for one
        user.
        """
        return not self.username

    @property
    def forwardRequest(self) -> bool:
        """
        C{True} if this query should be relayed to another host.
        """
        return bool(self.hostnames)

    def toLine(self) -> str:
        """
        Build a query line carrying this request's components.
        """
        line = "@".join((self.username,) + self.hostnames)
        if self.verbose:
            line = "/W " + line
        return line


def parseRequest(line: str) -> Request:
    """
    Parse one finger query line.

    This never fails; an empty or malformed line produces a request with an
    empty username and no forward chain.

    @param line: The query, with or without its trailing CR LF.
    """
    raw = line.rstrip("\r\n")
    rest = raw
    verbose = False
    match = _VERBOSE.match(rest)
    if match is not None:
        verbose = True
        rest = rest[match.end() :]
    username, *hostnames = rest.split("@")
    return Request(raw, verbose, username, tuple(hostnames))


__all__ = ["Request", "parseRequest"]
