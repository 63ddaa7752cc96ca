# -*- test-case-name: txfinger.test.test_server -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
An asynchronous finger server.

Every connection carries exactly one query.  Once its line has been read,
the query is either refused (forwarding denied), relayed to another host
(forwarding enabled), or handed to the application callback as a
L{Transaction}, which answers it through the transaction's response.
"""

from typing import Callable, Optional

from twisted.internet.abstract import isIPv6Address
from twisted.internet.defer import Deferred, maybeDeferred, succeed
from twisted.internet.endpoints import TCP4ServerEndpoint, TCP6ServerEndpoint
from twisted.internet.error import ConnectionDone
from twisted.internet.interfaces import IListeningPort, IStreamServerEndpoint
from twisted.internet.protocol import ServerFactory, connectionDone
from twisted.logger import Logger
from twisted.protocols.basic import LineReceiver
from twisted.python.failure import Failure

from txfinger._line import fromBytes
from txfinger.client import FingerClient
from txfinger.error import AlreadyStarted
from txfinger.forward import FORWARD_DENIED, forwardRequest
from txfinger.request import parseRequest
from txfinger.response import FingerResponse
from txfinger.transaction import Transaction

log = Logger()

Callback = Callable[[Transaction], object]


def logError(message: str) -> None:
    """
    The default error callback: log C{message}.
    """
    log.error("{message}", message=message)


class FingerServerProtocol(LineReceiver):
    """
    Read one query line and dispatch it through the factory.

    @ivar transaction: The L{Transaction} for this connection, or L{None}
        until the query line has arrived.
    """

    delimiter = b"\n"
    MAX_LENGTH = 16384
    transaction: Optional[Transaction] = None

    def lineReceived(self, line: bytes) -> None:
        # Finger is not pipelined; anything after the query is ignored.
        self.setRawMode()
        peer = self.transport.getPeer()
        response = FingerResponse(self.transport)
        self.transaction = Transaction(
            parseRequest(fromBytes(line)),
            response,
            remoteAddress=getattr(peer, "host", None),
            remotePort=getattr(peer, "port", None),
            localPort=getattr(self.transport.getHost(), "port", None),
        )
        self.factory.dispatch(self.transaction)

    def rawDataReceived(self, data: bytes) -> None:
        pass

    def lineLengthExceeded(self, line: bytes) -> None:
        self.factory.onError(
            "request line from {} longer than {} bytes".format(
                self.transport.getPeer(), self.MAX_LENGTH
            )
        )
        self.transport.loseConnection()

    def connectionLost(self, reason: Failure = connectionDone) -> None:
        if self.transaction is None:
            log.debug(
                "Connection from {peer} closed before a query arrived",
                peer=self.transport.getPeer(),
            )
        else:
            self.transaction.response.connectionLost()
        if not reason.check(ConnectionDone):
            self.factory.onError(reason.getErrorMessage())


class FingerServerFactory(ServerFactory):
    """
    Build L{FingerServerProtocol}s and decide how each query is answered.

    @ivar callback: Called with a L{Transaction} for every query which is
        neither denied nor forwarded.
    @ivar onError: Called with a diagnostic string when a connection fails.
    @ivar forwardDeny: Refuse queries with a forward chain.
    @ivar forwarder: A L{FingerClient} used to relay queries with a forward
        chain, or L{None} to hand them to C{callback} like any other.
    """

    protocol = FingerServerProtocol
    noisy = False

    def __init__(
        self,
        callback: Callback,
        onError: Callable[[str], object] = logError,
        forwardDeny: bool = False,
        forwarder: Optional[FingerClient] = None,
    ) -> None:
        self.callback = callback
        self.onError = onError
        self.forwardDeny = forwardDeny
        self.forwarder = forwarder

    def dispatch(self, transaction: Transaction) -> None:
        """
        Answer the query carried by C{transaction}.
        """
        request, response = transaction.request, transaction.response
        if self.forwardDeny and request.forwardRequest:
            response.emit(FORWARD_DENIED)
            response.complete()
        elif self.forwarder is not None and request.forwardRequest:
            d = forwardRequest(self.forwarder, request, response)
            d.addErrback(self._forwardFailed, transaction)
        else:
            d = maybeDeferred(self.callback, transaction)
            d.addErrback(self._callbackFailed, transaction)

    def _forwardFailed(self, reason: Failure, transaction: Transaction) -> None:
        self.onError(
            "forwarding {!r} to {!r} failed: {}".format(
                transaction.request.raw,
                transaction.request.hostnames[-1],
                reason.getErrorMessage(),
            )
        )
        if not transaction.response.closed:
            transaction.response.complete()

    def _callbackFailed(self, reason: Failure, transaction: Transaction) -> None:
        log.failure(
            "Finger callback failed for {request!r}",
            reason,
            request=transaction.request.raw,
        )
        self.onError(
            "callback failed for {!r}: {}".format(
                transaction.request.raw, reason.getErrorMessage()
            )
        )
        if not transaction.response.closed:
            transaction.response.complete()


_OPTIONS = ("hostname", "port", "onError", "onBind", "forwardDeny", "forward")


class FingerServer:
    """
    A finger server listening on one TCP port.

    The server keeps listening for as long as it is started; whoever
    started it is responsible for calling L{stop}.

    @ivar hostname: The interface to listen on; L{None} for all of them.
    @ivar port: The port to listen on; C{0} picks an ephemeral port.
    @ivar onError: Called with a diagnostic string when a connection or a
        forward fails.
    @ivar onBind: Called with the port number once the server listens.
    @ivar forwardDeny: Answer queries with a forward chain with
        L{FORWARD_DENIED}.
    @ivar forward: C{True} or a L{FingerClient} to relay queries with a
        forward chain.  If neither C{forwardDeny} nor C{forward} is set,
        such queries go to the callback like all others.
    @ivar bindPort: The port actually listened on, or L{None}.
    """

    def __init__(
        self,
        hostname: Optional[str] = None,
        port: int = 79,
        onError: Callable[[str], object] = logError,
        onBind: Callable[[int], object] = lambda port: None,
        forwardDeny: bool = False,
        forward: object = False,
        reactor=None,
    ) -> None:
        if reactor is None:
            from twisted.internet import reactor
        self.hostname = hostname
        self.port = port
        self.onError = onError
        self.onBind = onBind
        self.forwardDeny = forwardDeny
        self.forward = forward
        self.bindPort: Optional[int] = None
        self._reactor = reactor
        self._started = False
        self._port: Optional[IListeningPort] = None

    def _endpoint(self, hostname: Optional[str], port: int) -> IStreamServerEndpoint:
        interface = hostname or ""
        if isIPv6Address(interface):
            return TCP6ServerEndpoint(self._reactor, port, interface=interface)
        return TCP4ServerEndpoint(self._reactor, port, interface=interface)

    def start(self, callback: Callback, **overrides) -> "Deferred[int]":
        """
        Start listening.

        @param callback: Called with a L{Transaction} for each query the
            server does not deny or forward itself.  It must eventually call
            C{transaction.response.complete()}.
        @param overrides: Values replacing the constructor's options for
            this start only.

        @return: A L{Deferred} firing with the port listened on, after
            C{onBind} has been called with it.

        @raise AlreadyStarted: If the server was started and not stopped.
        """
        unknown = set(overrides) - set(_OPTIONS)
        if unknown:
            raise TypeError("unknown options: {}".format(", ".join(sorted(unknown))))
        if self._started:
            raise AlreadyStarted("finger server already started")
        config = {name: overrides.get(name, getattr(self, name)) for name in _OPTIONS}

        forwarder = config["forward"]
        if not forwarder:
            forwarder = None
        elif not hasattr(forwarder, "finger"):
            forwarder = FingerClient(reactor=self._reactor)
        factory = FingerServerFactory(
            callback, config["onError"], bool(config["forwardDeny"]), forwarder
        )

        self._started = True

        def listening(port: IListeningPort) -> int:
            self._port = port
            self.bindPort = port.getHost().port
            log.info("Finger server listening on port {port}", port=self.bindPort)
            config["onBind"](self.bindPort)
            return self.bindPort

        def failed(reason: Failure) -> Failure:
            self._started = False
            return reason

        d = self._endpoint(config["hostname"], config["port"]).listen(factory)
        return d.addCallbacks(listening, failed)

    def stop(self) -> "Deferred[None]":
        """
        Stop listening.  Connections already accepted are left alone.

        @return: A L{Deferred} firing once the port is closed.
        """
        port, self._port = self._port, None
        self._started = False
        self.bindPort = None
        if port is None:
            return succeed(None)
        return maybeDeferred(port.stopListening)


def fingerServer(callback: Callback, **options) -> FingerServer:
    """
    Create and start a L{FingerServer}.

    The server runs until the caller stops it.  A failure to listen is
    reported through the server's C{onError}.

    @param options: Keyword arguments for L{FingerServer}.
    """
    server = FingerServer(**options)
    d = server.start(callback)
    d.addErrback(
        lambda reason: server.onError(
            "could not listen: {}".format(reason.getErrorMessage())
        )
    )
    return server


__all__ = [
    "FingerServerProtocol",
    "FingerServerFactory",
    "FingerServer",
    "fingerServer",
    "logError",
]
