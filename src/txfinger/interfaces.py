# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Interface documentation for txfinger.
"""

from zope.interface import Attribute, Interface


class IFingerResponse(Interface):
    """
    The line sink through which a finger server replies to one request.

    A finger response has no status code and no terminator line: it is
    whatever lines are emitted before the connection is closed by
    L{IFingerResponse.complete}.
    """

    closed = Attribute(
        "C{True} once the response has been completed or the connection "
        "carrying it has gone away."
    )

    def emit(lines):
        """
        Send one or more lines to the client.

        Line terminators are added by the response and must not be included.

        @param lines: A single line (L{str} or L{bytes}), or an iterable of
            lines which are written in order.  L{None} entries are skipped.

        @raise txfinger.error.ResponseClosed: If L{complete} has already been
            called.
        """

    def complete():
        """
        Finish the response and close the connection once every line emitted
        so far has been written.

        @raise txfinger.error.ResponseClosed: If L{complete} has already been
            called.
        """


__all__ = ["IFingerResponse"]
