# -*- test-case-name: txfinger.test.test_service -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Support module for making a finger server from command line options.
"""

from twisted.python import usage

from txfinger.server import FingerServer
from txfinger.service import FingerService
from txfinger.users import UserTable


class Options(usage.Options):
    synopsis = "[options]"
    longdesc = "Makes a finger server answering from a table of users."
    optParameters = [
        ["interface", "i", None, "interface to listen on (default: all)"],
        ["port", "p", 79, "port to listen on", int],
        ["users", "u", None, "file of 'name: plan' lines to answer from"],
    ]
    optFlags = [
        ["forward", None, "relay user@host queries to the named host"],
        ["deny-forward", None, "refuse user@host queries"],
    ]

    compData = usage.Completions(optActions={"users": usage.CompleteFiles()})

    def postOptions(self):
        if self["forward"] and self["deny-forward"]:
            raise usage.UsageError("--forward and --deny-forward conflict")


def makeService(config, reactor=None):
    if config["users"] is None:
        table = UserTable({})
    else:
        table = UserTable.fromFile(config["users"])
    server = FingerServer(
        hostname=config["interface"],
        port=config["port"],
        forwardDeny=config["deny-forward"],
        forward=config["forward"],
        reactor=reactor,
    )
    return FingerService(server, table)
