""" Exceptions raised by zmqcore. Conditions that are expected in normal
    operation, such as an interrupted receive, are not represented here;
    they are returned to the caller as None.
"""


class ZmqCoreError(Exception):
    """ Base class for all zmqcore errors.
    """


class TransportError(ZmqCoreError):
    """ The underlying ZeroMQ layer rejected a request, for example when
        a socket of an unknown type is requested, or the process has run
        out of sockets.
    """


class ContextDestroyed(TransportError):
    """ An operation was attempted on a :class:`zmqcore.Context` that has
        already been destroyed.
    """


class ConfigurationError(ZmqCoreError, ValueError):
    """ The zmqcore configuration, either from the environment or from
        the configuration file, could not be interpreted.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
