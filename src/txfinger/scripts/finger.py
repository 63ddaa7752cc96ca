# -*- test-case-name: txfinger.test.test_scripts -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
A finger command line client.

Example usage::

    txfinger grimlock@example.com
    txfinger -l @example.com
    txfinger grimlock@example.com@gateway.example.net
"""

import sys

import attr

from twisted.internet import task
from twisted.python import usage

from txfinger.client import FingerClient
from txfinger.forward import nextHop
from txfinger.request import parseRequest


class Options(usage.Options):
    """
    Options based on finger(1).
    """

    synopsis = "Usage: txfinger [OPTIONS] [USER][@HOST...]"

    optFlags = [
        ["long", "l", "Ask for verbose output (send the /W prefix)."],
    ]

    optParameters = [
        ["server", "s", "127.0.0.1", "The server to ask when QUERY names no host."],
        ["port", "p", 79, "The port number of the finger server.", int],
    ]

    def parseArgs(self, query=""):
        self["query"] = query


def queryFor(options):
    """
    Work out which host to connect to and what to send it.

    C{user@host} asks C{host} about C{user}; longer chains are handed to the
    last host to forward, exactly as a forwarding server would.
    """
    request = parseRequest(options["query"])
    if options["long"] and not request.verbose:
        request = attr.evolve(request, verbose=True)
    if request.forwardRequest:
        return nextHop(request)
    return options["server"], request.toLine()


def main(reactor, *argv):
    options = Options()
    try:
        options.parseOptions(argv)
    except usage.UsageError as errortext:
        sys.stderr.write(str(options) + "\n")
        sys.stderr.write("ERROR: %s\n" % (errortext,))
        raise SystemExit(1)

    hostname, query = queryFor(options)
    client = FingerClient(port=options["port"], reactor=reactor)

    def printLines(lines):
        for line in lines:
            print(line)

    def printError(reason):
        sys.stderr.write("txfinger: %s\n" % (reason.getErrorMessage(),))
        raise SystemExit(1)

    d = client.finger(query, hostname=hostname)
    d.addCallbacks(printLines, printError)
    return d


def run():
    task.react(main, sys.argv[1:])


if __name__ == "__main__":
    run()
