import itertools
import pytest
import zmq

import zmqcore


_endpoints = itertools.count()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """ Keep the user's own configuration, if any, out of the tests.
    """

    monkeypatch.setenv('ZMQCORE_HOME', str(tmp_path))
    for variable in zmqcore.config.environment.values():
        monkeypatch.delenv(variable, raising=False)

    zmqcore.config.reset()
    yield
    zmqcore.config.reset()


@pytest.fixture
def endpoint():
    """ Return a function that generates unique inproc:// addresses, so that
        tests sharing a ZeroMQ context never collide.
    """

    def generate(name='test'):
        return 'inproc://%s-%d' % (name, next(_endpoints))

    return generate


@pytest.fixture
def context():

    context = zmqcore.Context()
    yield context
    context.destroy()


@pytest.fixture
def pair(context, endpoint):
    """ A connected pair of PAIR sockets; receives time out rather than
        blocking forever if something goes wrong.
    """

    address = endpoint('pair')

    output = context.create_socket(zmq.PAIR)
    output.bind(address)

    input = context.create_socket(zmq.PAIR)
    input.setsockopt(zmq.RCVTIMEO, 5000)
    input.connect(address)

    return output, input

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
