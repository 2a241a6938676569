""" Python implementation of zmqcore: resource management and multipart
    message handling layered on top of ZeroMQ. Sockets are created through
    a :class:`Context`, which tracks them so they can be torn down together;
    :class:`Message` handles multipart framing; the :mod:`devices` relay
    whole messages between sockets on a background thread.
"""

# Utility components.

from . import errors
from . import json
from . import config

# Primary public-facing interfaces.

from . import frame
from . import message
from . import context
from . import devices

from .frame import Frame
from .message import Message
from .context import Context
from .devices import Queue, Forwarder, Streamer

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
