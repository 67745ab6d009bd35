"""Lightweight payload validation utilities.

Shared by the Socket.IO handlers and the JSON round API. Provides minimal
schema-like checking with clear, consistent error responses.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'number', 'bool', 'dict'
Extras: max_len / min_len (str), choices (str), min / max (int, number)

If invalid: (False, {'field': 'direction', 'error': 'unknown direction', 'code': 'choice'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from mazeswipe.maze.slide import direction_from_delta, parse_direction

PRIMITIVES = {
    'str': (str,),
    'int': (int,),
    'number': (int, float),
    'bool': (bool,),
    'dict': (dict,),
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        # bool is an int subclass; only the 'bool' type accepts it
        if isinstance(value, bool) and type_name != 'bool':
            return _fail(name, f'expected {type_name}', 'type')
        if not isinstance(value, PRIMITIVES[type_name]):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            value = value.strip()
            if not value:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(value) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras and value.lower() not in extras['choices']:
                return _fail(name, f'must be one of {sorted(extras["choices"])}', 'choice')
        elif type_name in ('int', 'number'):
            if 'min' in extras and value < extras['min']:
                return _fail(name, f'must be >= {extras["min"]}', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f'must be <= {extras["max"]}', 'max')
        out[name] = value
    return True, out


DIRECTION_CHOICES = {
    'up', 'down', 'left', 'right', 'u', 'd', 'l', 'r',
    'n', 's', 'e', 'w', 'north', 'south', 'east', 'west',
}

# Predefined schemas used by handlers
SWIPE = {
    'direction': ('str', False, {'max_len': 8, 'choices': DIRECTION_CHOICES}),
    'dx': ('number', False),
    'dy': ('number', False),
}
SET_MODE = {
    'hard': ('bool', True),
}
GENERATE = {
    'rows': ('int', False, {'min': 5, 'max': 101}),
    'cols': ('int', False, {'min': 5, 'max': 101}),
    'seed': ('int', False),
}


def parse_swipe(payload: Any) -> Tuple[bool, Dict[str, Any]]:
    """Validate a swipe payload: an explicit direction or a raw (dx, dy) delta."""
    ok, result = validate(payload, SWIPE)
    if not ok:
        return ok, result
    if 'direction' in result:
        return True, {'direction': parse_direction(result['direction'])}
    if 'dx' in result and 'dy' in result:
        direction = direction_from_delta(result['dx'], result['dy'])
        if direction is None:
            return _fail('dx', 'swipe delta must not be zero', 'zero')
        return True, {'direction': direction}
    return _fail('direction', 'missing direction or dx/dy', 'required')


__all__ = ['GENERATE', 'SET_MODE', 'SWIPE', 'parse_swipe', 'validate']
