# pyright: standard

import msgspec


def to_json(obj: object) -> bytes:
    """Encode an object to JSON bytes using msgspec."""
    return msgspec.json.encode(obj)


def to_pretty_json(obj: object) -> bytes:
    """Encode an object to indented JSON bytes; used for files people may inspect by hand."""
    return msgspec.json.format(msgspec.json.encode(obj), indent=2)


def from_json[T](type_spec: type[T], data: bytes | str) -> T:
    """Decode JSON data (bytes or str) into the specified type."""
    return msgspec.json.decode(data, type=type_spec)

