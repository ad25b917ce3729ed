'''Export of election records to JSON-ready dictionaries.

Results, held elections and everything inside them (options, ballots,
tallies) are converted recursively. Dataclasses and other objects become
dictionaries with a ``class`` key holding their scoped class name; enums
become their scoped class name and value; tuples and frozensets keep their
type in a ``type`` key.
'''

import dataclasses
import enum
from fractions import Fraction
from typing import Any, Callable, Dict, List


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, enum.Enum):
        return enum_to_json(value)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif hasattr(value, '_asdict'):
        return {
            key: serialize_value(val) for key, val in value._asdict().items()
        }
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif type(value) in CONVERTIBLE_TYPES:
        return CONVERTIBLE_TYPES[type(value)](value)
    elif hasattr(value, '__iter__'):
        if hasattr(value, 'items') and hasattr(value, 'keys'):
            if all(isinstance(key, str) for key in value.keys()):
                return {
                    key: serialize_value(val)
                    for key, val in value.items()
                }
            else:
                return {
                    'type': 'dict',
                    'keys': [serialize_value(key) for key in value.keys()],
                    'values': [serialize_value(val) for val in value.values()]
                }
        else:
            return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def dataclass_to_dict(obj: Any, **extra: Any) -> Dict[str, Any]:
    '''Serialize all fields of a dataclass instance.

    :param extra: Additional entries to include, serialized as well.
    '''
    out_dict = {'class': scoped_class_name(obj)}
    for field in dataclasses.fields(obj):
        out_dict[field.name] = serialize_value(getattr(obj, field.name))
    for key, val in extra.items():
        out_dict[key] = serialize_value(val)
    return out_dict


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize an election record to a JSON-ready dictionary.

    :param obj: A held election, an election result or any of their parts.
    """
    return serialize_value(obj)


def scoped_class_name(value: Any):
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))


def enum_to_json(member: enum.Enum) -> Dict[str, Any]:
    return {'type': scoped_class_name(member), 'value': member.value}


def fraction_to_json(f: Fraction) -> Dict[str, Any]:
    return {'type': 'Fraction', 'arguments': f.as_integer_ratio()}


def sequence_to_json_factory(typeobj):
    typename = typeobj.__name__

    def sequence_to_json(seq) -> Dict[str, Any]:
        if typeobj is frozenset:
            # sets have no order of their own
            seq = sorted(seq, key=repr)
        return {'type': typename, 'value': [serialize_value(v) for v in seq]}

    return sequence_to_json


ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

CONVERTIBLE_TYPES: Dict[type, Callable] = {
    Fraction: fraction_to_json,
}

SEQUENCE_TYPES: List[type] = [frozenset, tuple]

for seqtype in SEQUENCE_TYPES:
    CONVERTIBLE_TYPES[seqtype] = sequence_to_json_factory(seqtype)
