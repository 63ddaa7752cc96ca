# -*- test-case-name: txfinger -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
txfinger: an asynchronous Finger (RFC 1288) client and server for Twisted.

Answering queries::

    from txfinger import fingerServer

    def answer(transaction):
        if transaction.request.listingRequest:
            transaction.response.emit(["users:", "grimlock"])
        else:
            transaction.response.emit("no such user")
        transaction.response.complete()

    server = fingerServer(answer, port=8079)

Asking::

    from txfinger import fingerClient

    fingerClient("localhost", "grimlock").addCallback(print)
"""

from txfinger._version import __version__ as version
from txfinger.client import FingerClient, fingerClient
from txfinger.request import Request, parseRequest
from txfinger.server import FingerServer, fingerServer
from txfinger.transaction import Transaction

__version__ = version.short()

__all__ = [
    "FingerClient",
    "FingerServer",
    "Request",
    "Transaction",
    "fingerClient",
    "fingerServer",
    "parseRequest",
]
