""" A :class:`Message` is an ordered collection of :class:`Frame` instances,
    representing a ZeroMQ multipart message. Sending a message sends each
    frame in turn, with every frame but the last flagged as having more
    to follow; receiving a message collects frames until the final one
    arrives.

    A simple single-frame string message::

        zmqcore.Message.from_strings('Hello').send(output)

    Several frames in one message::

        message = zmqcore.Message()
        for number in range(10):
            message.add_string('Frame%d' % (number))
        message.send(output)

    Receiving a message and iterating over the frames::

        received = zmqcore.Message.recv(input)
        for frame in received:
            ...
"""

import collections
import io
import struct
import zmq

from .frame import Frame


# The persisted representation of a message is a four-byte frame count,
# followed by a four-byte length and the raw bytes for each frame. All
# integers are big-endian and signed.

_integer = struct.Struct('>i')


def _as_frame(thing):

    if isinstance(thing, Frame):
        return thing

    if thing is None:
        raise ValueError('cannot add None to a message')

    return Frame(thing)


def _read_exactly(stream, size):

    data = stream.read(size)

    if data is None or len(data) != size:
        raise EOFError('expected %d bytes, received %d' % (size, len(data or b'')))

    return bytes(data)


class Message:
    """ The :class:`Message` is a double-ended container of frames. Any
        positional arguments are added as frames, in order; strings are
        encoded as UTF-8, and bytes are used as-is.

        Methods that remove or inspect a frame at either end of the message
        return None if the message is empty.
    """

    def __init__(self, *parts):

        self.frames = collections.deque()

        for part in parts:
            self.add(part)


    def __bool__(self):
        return len(self.frames) > 0


    def __contains__(self, frame):

        if frame is None:
            return False

        return _as_frame(frame) in self.frames


    def __eq__(self, other):

        if self is other:
            return True

        if isinstance(other, Message):
            pass
        else:
            return NotImplemented

        if len(self.frames) != len(other.frames):
            return False

        for mine, theirs in zip(self.frames, other.frames):
            if mine != theirs:
                return False

        return True


    def __hash__(self):

        if len(self.frames) == 0:
            return 0

        result = 1
        for frame in self.frames:
            result = (31 * result + hash(frame)) & 0xFFFFFFFF

        return result


    def __iter__(self):
        return iter(self.frames)


    def __len__(self):
        return len(self.frames)


    def __reversed__(self):
        return reversed(self.frames)


    def __repr__(self):
        return 'Message(%s)' % (', '.join(repr(frame.data) for frame in self.frames))


    def __str__(self):

        out = io.StringIO()
        self.dump(out)
        return out.getvalue()


    def add(self, frame):
        """ Add a frame, bytes, or string to the back of the message.
        """

        self.frames.append(_as_frame(frame))

    add_last = add
    append = add


    def add_first(self, frame):
        """ Add a frame, bytes, or string to the front of the message.
        """

        self.frames.appendleft(_as_frame(frame))

    push = add_first


    def add_string(self, string):
        self.add(Frame(string))


    def extend(self, frames):
        for frame in frames:
            self.add(frame)


    def clear(self):
        """ Remove all frames from the message without destroying them.
        """

        self.frames.clear()


    def content_size(self):
        """ Return the total number of bytes contained in all frames.
        """

        size = 0
        for frame in self.frames:
            size += frame.size()

        return size


    def destroy(self):
        """ Destroy every frame contained in the message, and remove them.
        """

        for frame in self.frames:
            frame.destroy()

        self.frames.clear()


    def dump(self, out):
        """ Write the message in a human readable format to *out*, which
            can be any object with a ``write()`` method. This should only be
            used for debugging and tracing, it is inefficient when handling
            large messages.
        """

        out.write('--------------------------------------\n')
        for frame in self.frames:
            out.write('[%03d] %s\n' % (frame.size(), str(frame)))


    def duplicate(self):
        """ Return a new :class:`Message` containing copies of every frame.
        """

        copy = Message()
        for frame in self.frames:
            copy.add(frame.duplicate())

        return copy


    def peek_first(self):

        try:
            return self.frames[0]
        except IndexError:
            return None


    def peek_last(self):

        try:
            return self.frames[-1]
        except IndexError:
            return None


    def pop(self):
        """ Remove and return the frame at the front of the message. The
            caller now owns the frame.
        """

        try:
            return self.frames.popleft()
        except IndexError:
            return None

    poll_first = pop
    remove_first = pop


    def pop_string(self):
        """ Remove the frame at the front of the message and return its
            contents decoded as a string.
        """

        frame = self.pop()

        if frame is None:
            return None

        return str(frame)


    def remove(self, frame):
        """ Remove the first frame equal to *frame*. Returns True if a frame
            was removed.
        """

        try:
            self.frames.remove(_as_frame(frame))
        except ValueError:
            return False

        return True


    def remove_last(self):

        try:
            return self.frames.pop()
        except IndexError:
            return None

    poll_last = remove_last


    def remove_last_occurrence(self, frame):
        """ Remove the last frame equal to *frame*. Returns True if a frame
            was removed.
        """

        frame = _as_frame(frame)

        for index in range(len(self.frames) - 1, -1, -1):
            if self.frames[index] == frame:
                del self.frames[index]
                return True

        return False


    def send(self, socket, destroy=False):
        """ Send the message on the ZeroMQ *socket*. If *destroy* is True
            the frames are destroyed after sending; this happens even if the
            message has no frames, in which case nothing is sent. Returns
            True if every frame was accepted by the socket.
        """

        if socket is None:
            raise ValueError('socket is None')

        sent = True
        remaining = len(self.frames)

        for frame in self.frames:
            remaining -= 1
            if remaining > 0:
                flags = zmq.SNDMORE
            else:
                flags = 0

            if frame.send(socket, flags) == False:
                sent = False
                break

        if destroy == True:
            self.destroy()

        return sent


    def to_bytes(self):
        """ Return the persisted representation of the message, as
            written by :func:`save`.
        """

        buffer = io.BytesIO()
        Message.save(self, buffer)
        return buffer.getvalue()


    def unwrap(self):
        """ Remove and return the frame at the front of the message. If the
            next frame is empty it is removed and destroyed; this is the
            delimiter added by :func:`wrap`, or by a ROUTER socket when it
            adds an identity envelope.
        """

        if len(self.frames) == 0:
            return None

        frame = self.pop()
        empty = self.peek_first()

        if empty is not None and empty.has_data() and empty.size() == 0:
            empty = self.pop()
            empty.destroy()

        return frame


    def wrap(self, frame):
        """ Push *frame* plus an empty frame to the front of the message.
            The message takes ownership of the frame. A *frame* of None is
            ignored.
        """

        if frame is None:
            return

        self.push(Frame(b''))
        self.push(frame)


    @classmethod
    def from_bytes(cls, data):
        """ Return a :class:`Message` from its persisted representation, or
            None if the data could not be interpreted.
        """

        if data is None:
            return None

        return cls.load(io.BytesIO(data))


    @classmethod
    def from_strings(cls, *strings):
        """ Return a new :class:`Message` with one frame per string.
        """

        message = cls()
        for string in strings:
            message.add_string(string)

        return message


    @classmethod
    def load(cls, stream):
        """ Read a :class:`Message` from the binary *stream*, in the format
            written by :func:`save`. Returns None if *stream* is None, or if
            the data is truncated or malformed.
        """

        if stream is None:
            return None

        message = cls()

        try:
            count = _integer.unpack(_read_exactly(stream, _integer.size))[0]
            if count < 0:
                return None

            for number in range(count):
                size = _integer.unpack(_read_exactly(stream, _integer.size))[0]
                if size < 0:
                    return None

                message.add(Frame(_read_exactly(stream, size)))

        except (OSError, EOFError, ValueError):
            return None

        return message


    @classmethod
    def recv(cls, socket, flags=0):
        """ Receive a multipart message from *socket*. Returns None if the
            receive was interrupted, if the socket was closed, or if
            ``zmq.NOBLOCK`` is included in *flags* and no message is waiting.
            Any frames received before such a condition are discarded.
        """

        if socket is None:
            raise ValueError('socket is None')

        message = cls()

        while True:
            frame = Frame.recv(socket, flags)

            if frame is None or frame.has_data() == False:
                message.destroy()
                return None

            message.add(frame)

            if frame.more == False:
                break

        return message


    @staticmethod
    def save(message, stream):
        """ Write *message* to the binary *stream*: four bytes for the number
            of frames, then for every frame four bytes for the size of the
            frame followed by the frame data. Returns True if the message was
            written, False otherwise.
        """

        if message is None or stream is None:
            return False

        try:
            stream.write(_integer.pack(len(message.frames)))
            for frame in message.frames:
                data = frame.data
                if data is None:
                    data = b''

                stream.write(_integer.pack(len(data)))
                stream.write(data)

        except (OSError, ValueError, struct.error):
            return False

        return True


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
