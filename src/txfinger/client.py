# -*- test-case-name: txfinger.test.test_client -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
An asynchronous finger client.
"""

from typing import Callable, List, Optional

from twisted.internet.defer import Deferred
from twisted.internet.endpoints import HostnameEndpoint, connectProtocol
from twisted.internet.error import ConnectionDone
from twisted.internet.interfaces import IReactorTCP, IStreamClientEndpoint
from twisted.internet.protocol import connectionDone
from twisted.logger import Logger
from twisted.protocols.basic import LineReceiver
from twisted.python.failure import Failure

from txfinger._line import CRLF, fromBytes, toBytes
from txfinger.error import ExchangeFailed


class LineTooLong(Exception):
    """
    The server sent a line longer than L{FingerClientProtocol.MAX_LENGTH}.
    """


class FingerClientProtocol(LineReceiver):
    """
    Send one query and collect every line of the reply.

    The reply ends when the server closes the connection; a clean close
    fires L{finished} with the lines, anything else fails it with
    L{ExchangeFailed}.

    @ivar lines: The lines received so far.
    @ivar finished: A L{Deferred} which fires when the exchange is over.
    """

    delimiter = b"\n"

    def __init__(self, query: bytes, hostname: str = "", port: int = 0) -> None:
        self.query = query
        self.hostname = hostname
        self.port = port
        self.lines: List[str] = []
        self.finished: Deferred[List[str]] = Deferred()
        self._tooLong = False

    def connectionMade(self) -> None:
        self.transport.write(self.query + CRLF)

    def lineReceived(self, line: bytes) -> None:
        self.lines.append(fromBytes(line))

    def lineLengthExceeded(self, line: bytes) -> None:
        self._tooLong = True
        self.transport.loseConnection()

    def connectionLost(self, reason: Failure = connectionDone) -> None:
        # A reply is allowed to end without a final line terminator.
        leftover = self.clearLineBuffer()
        if leftover and not self._tooLong:
            self.lines.append(fromBytes(leftover))
        if self._tooLong:
            reason = Failure(LineTooLong(self.MAX_LENGTH))
        if reason.check(ConnectionDone):
            self.finished.callback(self.lines)
        else:
            self.finished.errback(
                ExchangeFailed(self.hostname, self.port, reason, self.lines)
            )


class FingerClient:
    """
    Query finger servers.

    Each call to L{finger} uses a connection of its own, so one client can
    be shared by any number of concurrent callers.

    @ivar hostname: The host queried when L{finger} is not given one.
    @ivar port: The port queried when L{finger} is not given one.
    @ivar onError: If not L{None}, called with a diagnostic string whenever
        an exchange fails, in addition to the failure of the L{Deferred}.
    """

    _log = Logger()

    def __init__(
        self,
        hostname: str = "127.0.0.1",
        port: int = 79,
        onError: Optional[Callable[[str], object]] = None,
        reactor: Optional[IReactorTCP] = None,
    ) -> None:
        if reactor is None:
            from twisted.internet import reactor  # type: ignore[no-redef]
        self.hostname = hostname
        self.port = port
        self.onError = onError
        self._reactor = reactor

    def endpointFor(self, hostname: str, port: int) -> IStreamClientEndpoint:
        """
        Create the endpoint used to reach C{hostname} on C{port}.

        Override this to route queries somewhere other than where their
        hostname points.
        """
        return HostnameEndpoint(self._reactor, hostname, port)

    def finger(
        self,
        request: str,
        hostname: Optional[str] = None,
        port: Optional[int] = None,
    ) -> "Deferred[List[str]]":
        """
        Send C{request} to a finger server.

        @param request: The query line, without a line terminator.
        @param hostname: The server to ask; defaults to L{hostname}.
        @param port: The port to ask on; defaults to L{port}.

        @return: A L{Deferred} firing with the lines of the reply, in order,
            or failing with L{ExchangeFailed}.
        """
        if hostname is None:
            hostname = self.hostname
        if port is None:
            port = self.port
        protocol = FingerClientProtocol(toBytes(request), hostname, port)
        self._log.debug(
            "Fingering {request!r} at {hostname}:{port}",
            request=request,
            hostname=hostname,
            port=port,
        )

        def connectFailed(reason: Failure) -> Failure:
            return Failure(ExchangeFailed(hostname, port, reason))

        d = connectProtocol(self.endpointFor(hostname, port), protocol)
        d.addCallbacks(lambda _: protocol.finished, connectFailed)
        d.addErrback(self._exchangeFailed)
        return d

    def _exchangeFailed(self, reason: Failure) -> Failure:
        if self.onError is not None:
            self.onError(str(reason.value))
        return reason


def fingerClient(hostname: str, request: str, **options) -> "Deferred[List[str]]":
    """
    Ask the finger server at C{hostname} about C{request} once.

    @param options: Further keyword arguments for L{FingerClient}.
    """
    return FingerClient(hostname, **options).finger(request)


__all__ = ["FingerClientProtocol", "FingerClient", "LineTooLong", "fingerClient"]
