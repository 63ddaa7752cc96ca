# -*- test-case-name: txfinger.test.test_forward -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Relaying of forwarded finger queries (C{user@host1@host2}).

A forwarding hop asks the last host in the chain about the user, handing
it the rest of the chain, and sends back whatever that host answered.  The
next host may well be a forwarding server itself, so a chain of any length
unwinds one hop at a time.  Nothing here limits the length of a chain or
notices a host appearing twice in it.
"""

from typing import List, Tuple

from twisted.internet.defer import Deferred
from twisted.logger import Logger

from txfinger.interfaces import IFingerResponse
from txfinger.request import Request

FORWARD_DENIED = "finger forwarding service denied"

log = Logger()


def nextHop(request: Request) -> Tuple[str, str]:
    """
    Work out where a forwarded query goes next and what to ask there.

    @param request: A request with a non-empty forward chain.

    @return: The host to connect to and the query line to send it.  The
        query keeps the username and the verbose flag and carries every host
        of the chain but the last.
    """
    *remaining, hostname = request.hostnames
    query = Request("", request.verbose, request.username, tuple(remaining))
    return hostname, query.toLine()


def forwardRequest(client, request: Request, response: IFingerResponse) -> Deferred:
    """
    Ask the next hop about C{request} and relay the answer.

    @param client: A L{FingerClient<txfinger.client.FingerClient>}, or
        anything with a compatible C{finger} method.
    @param request: The forwarded request.
    @param response: The response of the connection the request came in
        on.  It is completed once the relayed lines have been emitted.

    @return: A L{Deferred} which fires when the answer has been relayed, or
        fails with the client's failure, in which case nothing has been
        written to C{response}.
    """
    hostname, query = nextHop(request)
    log.info("Forwarding {query!r} to {hostname!r}", query=query, hostname=hostname)

    def relay(lines: List[str]) -> None:
        response.emit(lines)
        response.complete()

    return client.finger(query, hostname=hostname).addCallback(relay)


__all__ = ["FORWARD_DENIED", "nextHop", "forwardRequest"]
