# -*- test-case-name: txfinger.test.test_response -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
The server side of a finger reply.
"""

from typing import Iterable, Optional, Union

from zope.interface import implementer

from twisted.internet.interfaces import ITransport
from twisted.logger import Logger

from txfinger._line import CRLF, toBytes
from txfinger.error import ResponseClosed
from txfinger.interfaces import IFingerResponse

Line = Union[str, bytes]


@implementer(IFingerResponse)
class FingerResponse:
    """
    An L{IFingerResponse} which writes lines straight to a transport.

    A response starts out C{"open"}.  L{complete} moves it to
    C{"completed"}; after that, using it again is a programming error and
    raises L{ResponseClosed}.  If the connection goes away first, the server
    calls L{connectionLost} and the response becomes C{"disconnected"}: lines
    emitted after that are dropped, since the handler producing them had no
    way of knowing the client left.

    @ivar state: One of C{"open"}, C{"completed"} or C{"disconnected"}.
    """

    _log = Logger()

    def __init__(self, transport: ITransport) -> None:
        self._transport = transport
        self.state = "open"

    def __repr__(self) -> str:
        return f"<FingerResponse {self.state}>"

    @property
    def closed(self) -> bool:
        return self.state != "open"

    def emit(self, lines: Union[Line, Iterable[Optional[Line]]]) -> None:
        if self.state == "completed":
            raise ResponseClosed("emit() called on a completed response")
        if isinstance(lines, (str, bytes)):
            lines = [lines]
        if self.state == "disconnected":
            self._log.debug("Dropping lines for a disconnected client")
            return
        for line in lines:
            if line is not None:
                self._transport.write(toBytes(line) + CRLF)

    def complete(self) -> None:
        if self.state == "completed":
            raise ResponseClosed("complete() called twice")
        if self.state == "disconnected":
            return
        self.state = "completed"
        self._transport.loseConnection()

    def connectionLost(self) -> None:
        """
        The connection carrying this response is gone.
        """
        if self.state == "open":
            self.state = "disconnected"


__all__ = ["FingerResponse"]
