""" JSON decoding for the configuration file. The fastest available decoder
    is used: msgspec, then orjson, then the standard library. Whichever is
    used, malformed input raises ValueError.
"""

try:
    import msgspec
except ImportError:
    msgspec = None

orjson = None

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass


if msgspec is not None:
    _decoder = msgspec.json.Decoder()

    def loads(data):
        try:
            return _decoder.decode(data)
        except msgspec.DecodeError as e:
            raise ValueError(str(e)) from e

    backend = 'msgspec'

elif orjson is not None:
    loads = orjson.loads        # orjson.JSONDecodeError is a ValueError
    backend = 'orjson'

else:
    import json
    loads = json.loads          # json.JSONDecodeError is a ValueError
    backend = 'json'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
