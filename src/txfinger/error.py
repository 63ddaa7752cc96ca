# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Exceptions raised by txfinger.
"""

from typing import List, Optional

from twisted.python.failure import Failure


class AlreadyStarted(Exception):
    """
    L{FingerServer.start<txfinger.server.FingerServer.start>} was called on a
    server which is already listening.
    """


class ResponseClosed(Exception):
    """
    A line was emitted on, or completion requested of, a response which has
    already been completed.
    """


class ExchangeFailed(Exception):
    """
    A finger exchange with a remote server did not finish cleanly.

    @ivar hostname: The host which was being queried.
    @ivar port: The port which was being queried.
    @ivar reason: The L{Failure} describing what went wrong.
    @ivar lines: Whatever complete lines were received before the failure.
        Empty if the connection could not be established at all.
    """

    def __init__(
        self,
        hostname: str,
        port: int,
        reason: Failure,
        lines: Optional[List[str]] = None,
    ) -> None:
        Exception.__init__(self, hostname, port, reason)
        self.hostname = hostname
        self.port = port
        self.reason = reason
        self.lines = [] if lines is None else lines

    def __str__(self) -> str:
        return "finger exchange with {}:{} failed: {}".format(
            self.hostname, self.port, self.reason.getErrorMessage()
        )


__all__ = ["AlreadyStarted", "ResponseClosed", "ExchangeFailed"]
