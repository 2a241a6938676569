""" Default settings for zmqcore. A setting is resolved by checking, in
    order, the environment, the ``zmqcore.json`` file in the configuration
    directory, and finally the built-in defaults enumerated here.
"""

import logging
import os
import threading

from . import errors
from . import json


logger = logging.getLogger(__name__)

defaults = dict()
defaults['io_threads'] = 1
defaults['linger'] = 0
defaults['poll_interval'] = 0.25

environment = dict()
environment['io_threads'] = 'ZMQCORE_IO_THREADS'
environment['linger'] = 'ZMQCORE_LINGER'
environment['poll_interval'] = 'ZMQCORE_POLL_INTERVAL'

filename = 'zmqcore.json'

_cache = dict()
_cache_lock = threading.Lock()


def directory():
    """ Return the directory holding the zmqcore configuration file:
        ``$ZMQCORE_HOME`` if set, otherwise ``$HOME/.zmqcore``. The result
        is remembered until :func:`reset` is called. The directory is not
        required to exist.
    """

    if directory.found is None:
        found = os.environ.get('ZMQCORE_HOME')

        if found is None:
            home = os.environ.get('HOME')
            if home is None:
                raise errors.ConfigurationError('neither ZMQCORE_HOME nor HOME is set')

            found = os.path.join(home, '.zmqcore')

        directory.found = found

    return directory.found

directory.found = None


def load(target=None):
    """ Return the contents of the configuration file as a dictionary. The
        default *target* is ``zmqcore.json`` in the :func:`directory`; a
        missing file is not an error, and results in an empty dictionary.
        The parsed contents are cached; call :func:`reset` to force the
        file to be read again.
    """

    if target is None:
        target = os.path.join(directory(), filename)

    with _cache_lock:
        try:
            return _cache[target]
        except KeyError:
            pass

        try:
            with open(target, 'rb') as handle:
                raw = handle.read()
        except FileNotFoundError:
            contents = dict()
        else:
            try:
                contents = json.loads(raw)
            except ValueError as e:
                raise errors.ConfigurationError('cannot parse %s: %s' % (target, str(e))) from e

            if isinstance(contents, dict):
                pass
            else:
                raise errors.ConfigurationError('expected a JSON object in ' + target)

            logger.debug("loaded configuration from %s", target)

        _cache[target] = contents

    return contents


def get(key):
    """ Return the configured value for *key*, which must be one of the
        keys in :data:`defaults`. The value is coerced to the same type as
        the built-in default.
    """

    try:
        default = defaults[key]
    except KeyError:
        raise KeyError('unknown zmqcore setting: ' + str(key))

    value = None

    try:
        variable = environment[key]
    except KeyError:
        pass
    else:
        value = os.environ.get(variable)

    if value is None:
        value = load().get(key)

    if value is None:
        return default

    try:
        value = type(default)(value)
    except (TypeError, ValueError) as e:
        raise errors.ConfigurationError('invalid value for %s: %s' % (key, repr(value))) from e

    return value


def reset():
    """ Forget any cached configuration, including the directory location.
    """

    with _cache_lock:
        _cache.clear()

    directory.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
