""" A :class:`Frame` is a single part of a ZeroMQ multipart message.
"""

import errno
import zmq


# Conditions under which a receive produces no frame rather than raising.
# A closed socket or an interrupted system call are normal outcomes when
# another thread is shutting things down.

_absent_errnos = set((errno.EINTR, zmq.ENOTSOCK))


def _as_bytes(data):

    if data is None:
        return None

    if isinstance(data, str):
        return data.encode('utf-8')

    # Only str and buffer objects; an integer is not a frame size.

    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError('frame data must be str or bytes-like, not ' + type(data).__name__) from None

    return view.tobytes()


class Frame:
    """ The :class:`Frame` holds the binary payload for one part of a
        multipart message. The *data* can be bytes, any object supporting
        the buffer protocol, or a string, which will be encoded as UTF-8.
        A frame constructed without *data* has no payload, which is not the
        same thing as a zero-length payload; see :func:`has_data`.

        :ivar data: The payload, as bytes, or None.
        :ivar more: True if another frame followed this one when it was
            received. Only meaningful immediately after :func:`recv`.
    """

    def __init__(self, data=None):

        self.data = _as_bytes(data)
        self.more = False


    def __eq__(self, other):

        if self is other:
            return True

        if isinstance(other, Frame):
            return self.data == other.data

        return NotImplemented


    def __hash__(self):
        return hash(self.data)


    def __len__(self):
        return self.size()


    def __repr__(self):
        return 'Frame(%s)' % (repr(self.data))


    def __str__(self):

        if self.data is None:
            return ''

        return self.data.decode('utf-8', errors='replace')


    def destroy(self):
        """ Release the payload. The frame has no data afterwards.
        """

        self.data = None
        self.more = False


    def duplicate(self):
        """ Return a new :class:`Frame` with a copy of this frame's payload.
        """

        copy = Frame()
        copy.data = self.data
        return copy


    def has_data(self):
        """ Return True if this frame has a payload, even an empty one.
        """

        return self.data is not None


    def size(self):

        if self.data is None:
            return 0

        return len(self.data)


    def send(self, socket, flags=0):
        """ Send this frame on the ZeroMQ *socket*; *flags* is passed
            through, and would typically include ``zmq.SNDMORE`` for all but
            the final frame of a message. Returns False if the socket could
            not accept the frame without blocking and ``zmq.NOBLOCK`` was
            requested; any other failure raises the underlying
            :class:`zmq.ZMQError`.
        """

        if socket is None:
            raise ValueError('socket is None')

        data = self.data
        if data is None:
            data = b''

        try:
            socket.send(data, flags)
        except zmq.Again:
            return False

        return True


    def streq(self, string):
        """ Return True if the payload is equal to the UTF-8 encoding of
            *string*.
        """

        if self.data is None:
            return False

        return self.data == string.encode('utf-8')


    def strhex(self):
        """ Return the payload as a string of uppercase hexadecimal digits.
        """

        if self.data is None:
            return ''

        return self.data.hex().upper()


    @classmethod
    def recv(cls, socket, flags=0):
        """ Receive a single frame from *socket*. Returns None if no frame
            could be received: the receive was interrupted, the socket or
            its context was closed, or ``zmq.NOBLOCK`` was requested and
            nothing is waiting.
        """

        if socket is None:
            raise ValueError('socket is None')

        try:
            data = socket.recv(flags)
        except (zmq.Again, zmq.ContextTerminated):
            return None
        except zmq.ZMQError as e:
            if e.errno in _absent_errnos:
                return None
            raise

        frame = cls(data)

        try:
            frame.more = bool(socket.getsockopt(zmq.RCVMORE))
        except zmq.ZMQError as e:
            if e.errno in _absent_errnos or e.errno == zmq.ETERM:
                return None
            raise

        return frame


# end of class Frame


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
