# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{txfinger.request}.
"""

from twisted.trial.unittest import SynchronousTestCase

from txfinger.request import Request, parseRequest


class ParseRequestTests(SynchronousTestCase):
    """
    Tests for L{parseRequest}.
    """

    def assertParsed(self, line, verbose, username, hostnames):
        request = parseRequest(line)
        self.assertEqual(
            (request.verbose, request.username, request.hostnames),
            (verbose, username, hostnames),
        )
        return request

    def test_empty(self):
        """
        An empty line is a listing request with no forward chain.
        """
        request = self.assertParsed("", False, "", ())
        self.assertTrue(request.listingRequest)
        self.assertFalse(request.forwardRequest)
        self.assertEqual(request.raw, "")

    def test_username(self):
        """
        A bare word is a query for that user.
        """
        request = self.assertParsed("grimlock", False, "grimlock", ())
        self.assertFalse(request.listingRequest)
        self.assertFalse(request.forwardRequest)

    def test_verboseForward(self):
        """
        C{/W} followed by whitespace marks the query verbose, and each C{@}
        introduces another host of the forward chain, in order.
        """
        request = self.assertParsed(
            "/W grimlock@hostA@hostB", True, "grimlock", ("hostA", "hostB")
        )
        self.assertTrue(request.forwardRequest)
        self.assertEqual(request.raw, "/W grimlock@hostA@hostB")

    def test_verboseListing(self):
        """
        A verbose query may still be a listing request.
        """
        request = self.assertParsed("/W ", True, "", ())
        self.assertTrue(request.listingRequest)

    def test_verboseAnyWhitespace(self):
        """
        Any run of whitespace after C{/W} belongs to the prefix.
        """
        self.assertParsed("/W \t  grimlock", True, "grimlock", ())

    def test_verboseCaseSensitive(self):
        """
        A lower case C{/w} is not the verbose prefix.
        """
        self.assertParsed("/w grimlock", False, "/w grimlock", ())

    def test_verboseNeedsWhitespace(self):
        """
        C{/W} not followed by whitespace is part of the username.
        """
        self.assertParsed("/Wgrimlock", False, "/Wgrimlock", ())
        self.assertParsed("/W", False, "/W", ())

    def test_lineTerminators(self):
        """
        Trailing CR and LF characters are not part of the query.
        """
        request = self.assertParsed("grimlock@hostA\r\n", False, "grimlock", ("hostA",))
        self.assertEqual(request.raw, "grimlock@hostA")
        self.assertParsed("grimlock\n", False, "grimlock", ())

    def test_listingForward(self):
        """
        A query made only of hosts is a forwarded listing request.
        """
        request = self.assertParsed("@hostA", False, "", ("hostA",))
        self.assertTrue(request.listingRequest)
        self.assertTrue(request.forwardRequest)

    def test_emptyHostnames(self):
        """
        Adjacent C{@}s, and a trailing one, produce empty hostnames rather
        than being collapsed.
        """
        self.assertParsed("grimlock@@hostA", False, "grimlock", ("", "hostA"))
        self.assertParsed("grimlock@", False, "grimlock", ("",))

    def test_deterministic(self):
        """
        Parsing the raw line of a request again gives an equal request.
        """
        for line in ["", "grimlock", "/W grimlock@a@@b", " @ /W x", "\x00@\xff"]:
            request = parseRequest(line)
            self.assertEqual(parseRequest(request.raw), request)

    def test_fromLine(self):
        """
        L{Request.fromLine} is L{parseRequest}.
        """
        self.assertEqual(
            Request.fromLine("/W grimlock@hostA"), parseRequest("/W grimlock@hostA")
        )


class ToLineTests(SynchronousTestCase):
    """
    Tests for L{Request.toLine}.
    """

    def test_roundTrip(self):
        """
        The line built from a parsed request is the line it came from.
        """
        for line in ["", "grimlock", "/W grimlock@a@b", "grimlock@@b", "@a"]:
            self.assertEqual(parseRequest(line).toLine(), line)

    def test_fromComponents(self):
        """
        A request assembled by hand renders its prefix, user and chain.
        """
        request = Request("", True, "grimlock", ("a", "b"))
        self.assertEqual(request.toLine(), "/W grimlock@a@b")
        self.assertEqual(Request("", False, "grimlock").toLine(), "grimlock")
