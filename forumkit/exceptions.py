# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Exceptions for Forumkit.

Serious exceptions are for unexpected things that we probably cannot
sanely or safely recover from.  Benign are for signaling expected (or
at least not unexpected) situations.

Invalid arguments and calls made in the wrong order raise the usual
``ValueError``, ``TypeError`` and ``RuntimeError``.
"""


class ForumkitException(Exception):
    """Catch-all parent of all Forumkit-related exceptions."""

    pass


class ForumkitSeriousException(ForumkitException):
    """Serious or unexpected problems that are generally not recoverable."""

    pass


class ForumkitBenignException(ForumkitException):
    """A not-unexpected situation, often signaling an error condition."""

    pass


class SystemException(ForumkitSeriousException):
    pass


class DatabaseException(ForumkitSeriousException):
    """Something went wrong talking to the database."""

    pass


class DatabaseQueryException(DatabaseException):
    """A statement could not be prepared or a cursor call failed."""

    pass


class DatabaseQueryExecutionException(DatabaseQueryException):
    """Executing a statement failed.

    The parameters the statement was executed with are kept in
    :attr:`parameters` to ease debugging.
    """

    def __init__(self, msg, parameters=()):
        super().__init__(msg)
        self.parameters = parameters

    def __str__(self):
        s = super().__str__()
        if self.parameters:
            s += f" (parameters: {list(self.parameters)!r})"
        return s


class DatabaseTransactionException(DatabaseException):
    """Commit or rollback without a matching transaction."""

    pass


class ForumkitConfigError(ForumkitBenignException):
    """The configuration file contains something we cannot use."""

    pass
