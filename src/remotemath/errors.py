"""
Definition of the exceptions raised while starting the math server.
Every one of them carries the process exit code the server reports it with.

remotemath - publish a math object with Pyro.
"""


class MathServerError(Exception):
    """Generic base of all math server startup errors."""
    exitcode = 1


class RegistryUnreachableError(MathServerError):
    """The name server could not be located, or the connection to it failed."""
    exitcode = 2


class BindRejectedError(MathServerError):
    """The name server refused to bind the name (for instance because it is already taken)."""
    exitcode = 3


class ServiceConstructionError(MathServerError):
    """The math object itself could not be created."""
    exitcode = 4


class ExportError(MathServerError):
    """The Pyro daemon could not be created, or refused to export the math object."""
    exitcode = 5
