# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
One finger request together with the means to answer it.
"""

from typing import Optional

import attr

from txfinger.interfaces import IFingerResponse
from txfinger.request import Request


@attr.s(frozen=True, auto_attribs=True)
class Transaction:
    """
    What an application callback is handed for each connection.

    @ivar request: The parsed query.
    @ivar response: Where the reply lines go; call
        L{IFingerResponse.complete} when done.
    @ivar remoteAddress: The client's address.
    @ivar remotePort: The client's port.
    @ivar localPort: The server port the client connected to.
    """

    request: Request
    response: IFingerResponse
    remoteAddress: Optional[str] = None
    remotePort: Optional[int] = None
    localPort: Optional[int] = None


__all__ = ["Transaction"]
