import errno
import io
import pytest
import zmq
import zmqcore

from zmqcore import Frame, Message


def test_construction():

    message = Message()
    assert len(message) == 0
    assert not message
    assert message.content_size() == 0

    message = Message('one', b'two', Frame('three'))
    assert len(message) == 3
    assert [frame.data for frame in message] == [b'one', b'two', b'three']

    message = Message.from_strings('Frame0', 'Frame1')
    assert message.pop_string() == 'Frame0'
    assert message.pop_string() == 'Frame1'
    assert message.pop_string() is None

    with pytest.raises(ValueError):
        Message(None)


def test_ends():

    message = Message()
    message.add('middle')
    message.push('front')
    message.add_last(b'back')
    message.add_first(Frame('very front'))
    message.append('very back')

    assert [str(frame) for frame in message] == ['very front', 'front', 'middle', 'back', 'very back']
    assert [str(frame) for frame in reversed(message)] == ['very back', 'back', 'middle', 'front', 'very front']

    assert message.peek_first().streq('very front')
    assert message.peek_last().streq('very back')
    assert len(message) == 5

    assert message.pop().streq('very front')
    assert message.remove_first().streq('front')
    assert message.remove_last().streq('very back')
    assert message.poll_last().streq('back')
    assert message.poll_first().streq('middle')

    assert message.pop() is None
    assert message.remove_first() is None
    assert message.remove_last() is None
    assert message.peek_first() is None
    assert message.peek_last() is None


def test_remove():

    message = Message('a', 'b', 'a', 'c')

    assert 'a' in message
    assert Frame('c') in message
    assert 'z' not in message
    assert None not in message

    assert message.remove_last_occurrence('a') == True
    assert message == Message('a', 'b', 'c')

    assert message.remove('a') == True
    assert message == Message('b', 'c')

    assert message.remove('a') == False
    assert message.remove_last_occurrence('a') == False

    message.extend(('d', b'e'))
    assert message == Message('b', 'c', 'd', 'e')


def test_content_size():

    message = Message(b'abc', b'', b'defgh')
    assert message.content_size() == 8


def test_wrap_unwrap():

    message = Message('body')
    address = Frame('address')

    message.wrap(address)
    assert len(message) == 3
    assert message.peek_first() is address
    assert list(message)[1].data == b''

    unwrapped = message.unwrap()
    assert unwrapped == Frame('address')
    assert message == Message('body')


def test_wrap_none():

    message = Message('body')
    message.wrap(None)
    assert message == Message('body')


def test_unwrap_without_envelope():
    """ Only an empty frame following the unwrapped frame is removed; a
        message that was never wrapped keeps the rest of its frames.
    """

    message = Message('address', 'body')
    assert message.unwrap().streq('address')
    assert message == Message('body')

    message = Message('only')
    assert message.unwrap().streq('only')
    assert len(message) == 0

    assert Message().unwrap() is None


def test_duplicate():

    message = Message('one', b'', 'three')
    copy = message.duplicate()

    assert copy == message
    assert copy is not message

    for original, duplicate in zip(message, copy):
        assert original is not duplicate

    copy.pop().destroy()
    copy.add('four')

    assert message == Message('one', b'', 'three')
    assert message.peek_first().data == b'one'

    assert Message().duplicate() == Message()


def test_destroy():

    message = Message('one', 'two')
    frames = list(message)

    message.destroy()
    assert len(message) == 0

    for frame in frames:
        assert frame.has_data() == False


def test_clear():

    message = Message('one', 'two')
    frames = list(message)

    message.clear()
    assert len(message) == 0

    for frame in frames:
        assert frame.has_data() == True


def test_equality():

    assert Message('a', 'b') == Message('a', 'b')
    assert Message('a', 'b') != Message('b', 'a')
    assert Message('a', 'b') != Message('a', 'b', 'c')
    assert Message('a', 'b', 'c') != Message('a', 'b')
    assert Message() == Message()
    assert Message('a') != Frame('a')

    assert hash(Message()) == 0
    assert hash(Message('a', 'b')) == hash(Message('a', 'b'))

    expected = (31 * 1 + hash(Frame('a'))) & 0xFFFFFFFF
    expected = (31 * expected + hash(Frame('b'))) & 0xFFFFFFFF
    assert hash(Message('a', 'b')) == expected


def test_dump():

    message = Message('Hello', b'')
    dumped = str(message)
    lines = dumped.splitlines()

    assert lines[0] == '-' * 38
    assert lines[1] == '[005] Hello'
    assert lines[2] == '[000] '

    out = io.StringIO()
    message.dump(out)
    assert out.getvalue() == dumped


def test_send_recv(pair):

    output, input = pair

    assert Message.from_strings('Hello').send(output) == True
    received = Message.recv(input)

    assert received == Message.from_strings('Hello')


def test_send_recv_multipart(pair):

    output, input = pair

    message = Message()
    for number in range(10):
        message.add_string('Frame%d' % (number))

    message.add(b'')
    copy = message.duplicate()

    message.send(output, destroy=True)
    assert len(message) == 0

    received = Message.recv(input)
    assert received == copy
    assert received.peek_last().more == False

    for frame in list(received)[:-1]:
        assert frame.more == True


def test_send_interoperates(pair):

    output, input = pair

    Message('a', 'b', 'c').send(output)
    assert input.recv_multipart() == [b'a', b'b', b'c']

    output.send_multipart((b'x', b'', b'z'))
    assert Message.recv(input) == Message('x', b'', 'z')


def test_send_empty(pair):

    output, input = pair

    message = Message()
    assert message.send(output, destroy=True) == True
    assert Message.recv(input, zmq.NOBLOCK) is None


def test_socket_required():

    with pytest.raises(ValueError):
        Message('a').send(None)

    with pytest.raises(ValueError):
        Message.recv(None)


def test_recv_nothing_waiting(pair):

    output, input = pair
    assert Message.recv(input, zmq.NOBLOCK) is None


def test_recv_closed(pair):

    output, input = pair
    input.close()

    assert Message.recv(input) is None


class Interrupted:
    """ Stands in for a socket whose receive fails partway through a
        multipart message; *parts* are delivered, then *failure* is raised.
    """

    def __init__(self, parts, failure):
        self.parts = list(parts)
        self.failure = failure
        self.more = 0

    def recv(self, flags=0):

        if len(self.parts) == 0:
            raise self.failure

        part = self.parts.pop(0)
        self.more = 1
        return part

    def getsockopt(self, option):
        assert option == zmq.RCVMORE
        return self.more


def test_recv_partial_discarded():

    for failure in (zmq.ZMQError(errno.EINTR), zmq.ContextTerminated(), zmq.Again()):
        socket = Interrupted((b'first', b'second'), failure)

        assert Message.recv(socket) is None
        assert socket.parts == []


def test_recv_after_partial(pair):
    """ A discarded partial message does not disturb the next one.
    """

    output, input = pair

    socket = Interrupted((b'partial',), zmq.ZMQError(errno.EINTR))
    assert Message.recv(socket) is None

    Message('complete', 'message').send(output)
    assert Message.recv(input) == Message('complete', 'message')


def test_invalid_frame_data():

    for invalid in (5, 2.5, object(), ['a']):
        with pytest.raises(TypeError):
            Message(invalid)

        with pytest.raises(TypeError):
            Message().push(invalid)

    message = Message(bytearray(b'ab'), memoryview(b'cd'))
    assert message == Message(b'ab', b'cd')
    assert message.content_size() == 4


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
