# -*- test-case-name: txfinger.test.test_users -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
A finger callback answering from a fixed table of users.
"""

from typing import Dict, Iterable, List, Mapping, Union

from twisted.python.filepath import FilePath

from txfinger.transaction import Transaction

NO_SUCH_USER = "no such user"


class UserTable:
    """
    Answer finger queries from a mapping of usernames to plans.

    A listing request gets C{users:} followed by every username.  A query
    for a known user gets that user's plan, preceded by a C{Login:} line
    when it is verbose.  Anything else gets L{NO_SUCH_USER}.

    @ivar users: Maps usernames to the lines of their plans.
    """

    def __init__(self, users: Mapping[str, Union[str, Iterable[str]]]) -> None:
        self.users: Dict[str, List[str]] = {}
        for name, plan in users.items():
            if isinstance(plan, str):
                plan = [plan]
            self.users[name] = list(plan)

    @classmethod
    def fromFile(cls, path: Union[str, FilePath]) -> "UserTable":
        """
        Load a table from a file of C{name: plan} lines.

        Blank lines and lines starting with C{#} are ignored.  A name which
        appears on several lines gets a plan of several lines.
        """
        if not isinstance(path, FilePath):
            path = FilePath(path)
        users: Dict[str, List[str]] = {}
        for line in path.getContent().decode("utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, _, plan = line.partition(":")
            users.setdefault(name.strip(), []).append(plan.strip())
        return cls(users)

    def __call__(self, transaction: Transaction) -> None:
        request, response = transaction.request, transaction.response
        if request.listingRequest:
            response.emit(["users:"] + sorted(self.users))
        elif request.username in self.users:
            if request.verbose:
                response.emit("Login: " + request.username)
            response.emit(self.users[request.username])
        else:
            response.emit(NO_SUCH_USER)
        response.complete()


__all__ = ["UserTable", "NO_SUCH_USER"]
