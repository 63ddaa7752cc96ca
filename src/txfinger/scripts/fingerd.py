# -*- test-case-name: txfinger.test.test_scripts -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Run a finger server answering from a table of users until interrupted.
"""

import sys

from twisted.internet import task
from twisted.internet.defer import Deferred
from twisted.logger import globalLogBeginner, textFileLogObserver
from twisted.python import usage

from txfinger import tap


def main(reactor, *argv):
    options = tap.Options()
    try:
        options.parseOptions(argv)
    except usage.UsageError as errortext:
        sys.stderr.write(str(options) + "\n")
        sys.stderr.write("ERROR: %s\n" % (errortext,))
        raise SystemExit(1)

    globalLogBeginner.beginLoggingTo([textFileLogObserver(sys.stderr)])
    service = tap.makeService(options, reactor)
    service.startService()
    reactor.addSystemEventTrigger("before", "shutdown", service.stopService)
    # Only a failure to listen ends this early; otherwise run until killed.
    finished = Deferred()
    service.whenListening.addErrback(finished.errback)
    return finished


def run():
    task.react(main, sys.argv[1:])


if __name__ == "__main__":
    run()
