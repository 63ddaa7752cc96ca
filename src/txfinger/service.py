# -*- test-case-name: txfinger.test.test_service -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Run a L{FingerServer} as part of a Twisted application.
"""

from twisted.application import service

from txfinger.server import Callback, FingerServer


class FingerService(service.Service):
    """
    A service which listens with C{server} while it is running.

    @ivar server: The L{FingerServer} started and stopped with the service.
    @ivar callback: The application callback given to the server.
    @ivar whenListening: The L{Deferred} returned by the last start of the
        server, or L{None} if the service never ran.
    """

    whenListening = None

    def __init__(self, server: FingerServer, callback: Callback) -> None:
        self.server = server
        self.callback = callback

    def startService(self):
        service.Service.startService(self)
        self.whenListening = self.server.start(self.callback)

    def stopService(self):
        service.Service.stopService(self)
        return self.server.stop()
