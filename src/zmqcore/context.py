""" The :class:`Context` manages the lifetime of ZeroMQ sockets. Every socket
    created via a :class:`Context` is tracked, and destroying the context
    closes all of them before terminating the underlying ZeroMQ context.

    ZeroMQ sockets are not thread-safe; the expected arrangement is one
    :class:`Context` per thread. A thread that needs to share the ZeroMQ
    context of another, for example to communicate via ``inproc://``
    endpoints, should use a shadow of the original :class:`Context`: the
    shadow tracks its own sockets, and destroying it leaves the shared
    ZeroMQ context intact.
"""

import logging
import zmq

from . import config
from . import errors


logger = logging.getLogger(__name__)


class Context:
    """ Create a new ZeroMQ context with *io_threads* background I/O
        threads. The *linger* period, in milliseconds, is applied to every
        socket when it is closed via this context. If either argument is
        not specified the value from :mod:`zmqcore.config` is used.

        :ivar context: The underlying :class:`zmq.Context`.
        :ivar io_threads: The number of ZeroMQ I/O threads.
        :ivar linger: Linger period for sockets closed via this context.
        :ivar main: True if this instance is responsible for terminating
            the underlying ZeroMQ context when it is destroyed.
        :ivar sockets: The sockets created via this instance that have not
            been destroyed. Do not modify this list directly.
    """

    def __init__(self, io_threads=None, linger=None):

        if io_threads is None:
            io_threads = config.get('io_threads')

        if linger is None:
            linger = config.get('linger')

        self.io_threads = int(io_threads)
        self.linger = int(linger)
        self.main = True
        self.sockets = list()
        self.destroyed = False
        self.context = zmq.Context(io_threads=self.io_threads)


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        self.destroy()


    def __repr__(self):

        if self.main:
            role = 'main'
        else:
            role = 'shadow'

        return '<%s %s, %d sockets>' % (self.__class__.__name__, role, len(self.sockets))


    def close(self):
        """ Synonym for :func:`destroy`.
        """

        self.destroy()


    def create_socket(self, type):
        """ Create a new ZeroMQ socket of the requested *type*, for example
            ``zmq.PUB`` or ``zmq.ROUTER``. The socket is not bound or
            connected. A :class:`zmqcore.errors.TransportError` is raised if
            ZeroMQ cannot create the socket.
        """

        if self.destroyed:
            raise errors.ContextDestroyed('cannot create a socket on a destroyed context')

        # Depending on the pyzmq version an unknown socket type is either
        # rejected by libzmq (ZMQError) or by pyzmq itself (ValueError).

        try:
            socket = self.context.socket(type)
        except (zmq.ZMQError, ValueError) as e:
            raise errors.TransportError('cannot create socket of type %s: %s' % (repr(type), str(e))) from e

        self.sockets.append(socket)
        logger.debug("created %s socket, %d tracked", repr(type), len(self.sockets))
        return socket

    socket = create_socket


    def destroy(self):
        """ Close every socket created via this context, then terminate the
            underlying ZeroMQ context if this is the main context. Terminating
            will block until any sockets created elsewhere on the same ZeroMQ
            context, such as via a shadow, are also closed. Calling this
            method more than once is harmless.
        """

        for socket in self.sockets:
            self._close(socket)

        count = len(self.sockets)
        self.sockets.clear()
        self.destroyed = True

        if self.main and self.context.closed == False:
            logger.debug("terminating ZeroMQ context after closing %d sockets", count)
            self.context.term()
        else:
            logger.debug("destroyed context, closed %d sockets", count)


    def destroy_socket(self, socket):
        """ Close the provided *socket* and stop tracking it. Sockets that are
            already closed, or were not created via this context, are
            tolerated.
        """

        if socket is None:
            return

        self._close(socket)

        try:
            self.sockets.remove(socket)
        except ValueError:
            pass
        else:
            logger.debug("destroyed socket, %d tracked", len(self.sockets))


    def _close(self, socket):

        if socket.closed:
            return

        socket.close(linger=self.linger)


    @classmethod
    def shadow(cls, origin):
        """ Return a new :class:`Context` that shares the ZeroMQ context of
            *origin*, but keeps its own set of sockets. The shadow is not the
            main context, and will not terminate the shared ZeroMQ context
            when it is destroyed.
        """

        if origin is None:
            raise ValueError('origin is None')

        shadow = cls.__new__(cls)
        shadow.io_threads = origin.io_threads
        shadow.linger = origin.linger
        shadow.main = False
        shadow.sockets = list()
        shadow.destroyed = False
        shadow.context = origin.context

        return shadow


# end of class Context


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
