# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{txfinger.server} and L{txfinger.client} talking to each other
over real TCP connections.
"""

from twisted.internet import reactor
from twisted.internet.defer import inlineCallbacks
from twisted.internet.endpoints import TCP4ClientEndpoint
from twisted.trial.unittest import TestCase

from txfinger.client import FingerClient, fingerClient
from txfinger.server import FingerServer
from txfinger.test.test_client import RefusingEndpoint


class LoopbackClient(FingerClient):
    """
    A L{FingerClient} which takes every hostname to mean the local host,
    and records the hostnames it was asked to connect to.
    """

    def __init__(self, port=0):
        FingerClient.__init__(self, port=port)
        self.hostnames = []

    def endpointFor(self, hostname, port):
        self.hostnames.append(hostname)
        return TCP4ClientEndpoint(reactor, "127.0.0.1", port)


class RefusingClient(FingerClient):
    """
    A L{FingerClient} which can never connect.
    """

    def endpointFor(self, hostname, port):
        return RefusingEndpoint()


def echo(transaction):
    """
    Answer with the query, then the client's port, then the server's port.
    """
    transaction.response.emit(
        [
            "request = '{}'".format(transaction.request.raw),
            str(transaction.remotePort),
            str(transaction.localPort),
        ]
    )
    transaction.response.complete()


def fields(transaction):
    """
    Answer with the parsed components of the query.
    """
    request = transaction.request
    transaction.response.emit("verbose = {}".format(request.verbose))
    transaction.response.emit("username = {}".format(request.username))
    transaction.response.emit("hostnames = {}".format("@".join(request.hostnames)))
    transaction.response.complete()


class EndToEndTests(TestCase):
    """
    A L{FingerClient} querying a L{FingerServer} on an ephemeral port.
    """

    def setUp(self):
        self.errors = []

    @inlineCallbacks
    def startServer(self, callback, **options):
        server = FingerServer(
            hostname="127.0.0.1", port=0, onError=self.errors.append, **options
        )
        port = yield server.start(callback)
        self.addCleanup(server.stop)
        return port

    @inlineCallbacks
    def test_listing(self):
        """
        An empty query reaches the callback, whose lines come back in order.
        """
        port = yield self.startServer(echo)
        lines = yield FingerClient(port=port).finger("")
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[0], "request = ''")
        self.assertTrue(lines[1].isdigit())
        self.assertEqual(lines[2], str(port))

    @inlineCallbacks
    def test_user(self):
        """
        A query for a user reaches the callback unchanged.
        """
        port = yield self.startServer(echo)
        lines = yield fingerClient("127.0.0.1", "grimlock", port=port)
        self.assertEqual(lines[0], "request = 'grimlock'")

    @inlineCallbacks
    def test_emptyResponse(self):
        """
        A callback which completes without emitting gives an empty answer.
        """
        port = yield self.startServer(lambda t: t.response.complete())
        lines = yield FingerClient(port=port).finger("grimlock")
        self.assertEqual(lines, [])

    @inlineCallbacks
    def test_onBind(self):
        """
        C{onBind} is called with the ephemeral port actually bound.
        """
        bound = []
        port = yield self.startServer(echo, onBind=bound.append)
        self.assertEqual(bound, [port])
        self.assertNotEqual(port, 0)

    @inlineCallbacks
    def test_forwardDeny(self):
        """
        A server denying forwarding answers a forward request with the
        denial line alone.
        """
        called = []
        port = yield self.startServer(called.append, forwardDeny=True)
        lines = yield FingerClient(port=port).finger("grimlock@hostA@hostB")
        self.assertEqual(lines, ["finger forwarding service denied"])
        self.assertEqual(called, [])

    @inlineCallbacks
    def test_forwardChain(self):
        """
        A forwarding server relays a chain one hop at a time, starting from
        the last host, until a query without hosts reaches the callback;
        its answer comes back through every hop.
        """
        forwarder = LoopbackClient()
        port = yield self.startServer(fields, forward=forwarder)
        forwarder.port = port
        lines = yield FingerClient(port=port).finger(
            "/W grimlock@localhost@foo@bar@baz"
        )
        self.assertEqual(forwarder.hostnames, ["baz", "bar", "foo", "localhost"])
        self.assertEqual(
            lines, ["verbose = True", "username = grimlock", "hostnames = "]
        )

    @inlineCallbacks
    def test_forwardToServer(self):
        """
        The hop after a forwarding server sees the user, the verbose flag
        and the rest of the chain.
        """
        backendPort = yield self.startServer(fields)
        forwarder = LoopbackClient(backendPort)
        port = yield self.startServer(fields, forward=forwarder)
        lines = yield FingerClient(port=port).finger(
            "/W grimlock@localhost@foo@bar@baz@backend"
        )
        self.assertEqual(forwarder.hostnames, ["backend"])
        self.assertEqual(
            lines,
            [
                "verbose = True",
                "username = grimlock",
                "hostnames = localhost@foo@bar@baz",
            ],
        )

    @inlineCallbacks
    def test_forwardEmptyHostname(self):
        """
        An empty hostname left by adjacent C{@}s is forwarded to like any
        other.
        """
        forwarder = LoopbackClient()
        port = yield self.startServer(fields, forward=forwarder)
        forwarder.port = port
        lines = yield FingerClient(port=port).finger("grimlock@@relay")
        self.assertEqual(forwarder.hostnames, ["relay", ""])
        self.assertEqual(
            lines, ["verbose = False", "username = grimlock", "hostnames = "]
        )

    @inlineCallbacks
    def test_forwardFailure(self):
        """
        When the next hop cannot be reached, the original client gets an
        empty answer and the server reports the failure.
        """
        port = yield self.startServer(fields, forward=RefusingClient())
        lines = yield FingerClient(port=port).finger("grimlock@nowhere")
        self.assertEqual(lines, [])
        self.assertEqual(len(self.errors), 1)
        self.assertIn("'nowhere'", self.errors[0])
