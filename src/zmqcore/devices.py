""" Devices relay complete multipart messages from one socket to another.
    A device runs until it is stopped; the usual arrangement is to run the
    device in a background thread via :func:`Device.start`::

        clients = context.create_socket(zmq.ROUTER)
        clients.bind('inproc://clients')
        workers = context.create_socket(zmq.DEALER)
        workers.bind('inproc://workers')

        queue = zmqcore.Queue(context, clients, workers)
        queue.start()
        ...
        queue.stop()
        queue.join()

    The device does not own the context or the sockets; the caller is still
    responsible for destroying them, after the device has stopped.
"""

import logging
import threading
import zmq

from . import config
from .message import Message


logger = logging.getLogger(__name__)


class Device:
    """ Base class for all devices. *context* is the :class:`zmqcore.Context`
        the *front* and *back* sockets were created with. Subclasses define
        which direction(s) messages flow in by overriding :func:`routes`.

        The device polls for incoming messages with a timeout of
        *interval* seconds, which bounds how long it takes for a call to
        :func:`stop` to be honored. A message that has been received is
        always sent before the device checks whether it should stop.
    """

    def __init__(self, context, front, back, interval=None):

        if context is None:
            raise ValueError('context is None')

        if front is None or back is None:
            raise ValueError('a device requires both a front and a back socket')

        if interval is None:
            interval = config.get('poll_interval')

        self.context = context
        self.front = front
        self.back = back
        self.interval = float(interval)

        self.running = False
        self.shutdown = threading.Event()
        self.thread = None


    def join(self, timeout=None):
        """ Wait for the background thread, if any, to exit. Returns True if
            the device is no longer running.
        """

        if self.thread is not None:
            self.thread.join(timeout)
            return not self.thread.is_alive()

        return not self.running


    def relay(self, source, destination):
        """ Receive one message from *source* and send it on *destination*.
            Returns False if *source* has been closed and no further messages
            can be relayed.
        """

        message = Message.recv(source)

        if message is None:
            # Interrupted, or there was nothing to receive after all. Only
            # a closed socket is a reason to stop.
            return not source.closed

        if message.send(destination, destroy=True) == False:
            logger.debug("%s dropped a message, destination would block", self.__class__.__name__)

        return True


    def routes(self):
        """ Return a dictionary mapping each socket that should be polled
            for incoming messages to the socket those messages will be sent
            on.
        """

        raise NotImplementedError('Device subclasses must implement routes()')


    def run(self):
        """ Relay messages until :func:`stop` is called, the ZeroMQ context is
            terminated, or one of the sockets is closed. This method blocks;
            use :func:`start` to run the device in a background thread.
        """

        routes = self.routes()
        timeout = int(self.interval * 1000)

        poller = zmq.Poller()
        for socket in routes.keys():
            poller.register(socket, zmq.POLLIN)

        self.running = True
        logger.debug("%s starting", self.__class__.__name__)

        try:
            while self.shutdown.is_set() == False:

                # Polling a closed socket is undefined; check first.

                for socket in routes.keys():
                    if socket.closed:
                        logger.debug("%s socket closed, stopping", self.__class__.__name__)
                        return

                ready = poller.poll(timeout)

                for active, flag in ready:
                    if self.relay(active, routes[active]) == False:
                        logger.debug("%s socket closed, stopping", self.__class__.__name__)
                        return

        except zmq.ContextTerminated:
            logger.debug("%s context terminated, stopping", self.__class__.__name__)

        except zmq.ZMQError as e:
            if e.errno == zmq.ENOTSOCK:
                logger.debug("%s socket closed, stopping", self.__class__.__name__)
            else:
                logger.exception("%s failed", self.__class__.__name__)
                raise

        finally:
            self.running = False


    def start(self):
        """ Run the device in a new background thread. Returns the device.
        """

        if self.thread is not None and self.thread.is_alive():
            raise RuntimeError('device is already running')

        self.shutdown.clear()
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()

        return self


    def stop(self):
        """ Request that the device stop relaying messages. The device will
            exit after the message currently being relayed, if any, has been
            sent.
        """

        self.shutdown.set()


# end of class Device



class Queue(Device):
    """ Relay messages in both directions between the *front* and *back*
        sockets. The typical use is a shared queue between a ROUTER socket
        facing clients and a DEALER socket facing workers; the identity
        envelope added by the ROUTER travels with the request, and is used
        to route the response back to the original client.
    """

    def routes(self):
        return {self.front: self.back, self.back: self.front}



class Forwarder(Device):
    """ Relay messages from the *front* socket to the *back* socket, and
        not in the other direction. The typical use is a SUB socket facing
        publishers and a PUB socket facing subscribers; the caller is
        responsible for setting the subscriptions on the SUB socket.
    """

    def routes(self):
        return {self.front: self.back}



class Streamer(Forwarder):
    """ Relay messages from the *front* socket to the *back* socket, and
        not in the other direction. The typical use is a PULL socket facing
        upstream producers and a PUSH socket facing downstream consumers.
    """

    pass


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
