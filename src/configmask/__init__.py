"""configmask - schema-driven sanitation of untrusted configuration data.

A ``Mask`` describes the shape a value is expected to have. Sanitizing an
arbitrary input through it always yields a value of that shape: missing or
invalid parts are replaced by defaults, primitives are coerced, unknown
object keys are dropped.

## Key Components

- `Mask`: schema node exposing `sanitize`, `parse`, `validate`, `clone`
- `construct_coercer`: primitive coercion used by non-composite types
- `load_config` / `load_config_from_file`: YAML and JSON configuration loading
- `UNDEFINED`: marker for an absent input value

## Schema Types

| type | result |
|------|--------|
| `any` | input unchanged |
| `object` | dict with the declared `properties`, each sanitized by its own mask |
| `set` | input if it is one of `values` |
| `list` | list of the input items that are in `values` |
| `combined` | first non-null result of `submasks` |
| `list_of` | list of items sanitized by `submask` or coerced to `subtype` |
| anything else | primitive coercion (`"number"`, `"text"`, `"string:strict"`, ...) |

## Quick Example

```python
from configmask import Mask

size = Mask({
    "type": "object",
    "properties": {
        "value": {"type": "number", "default": 0},
        "unit": {"type": "set", "values": ["px", "%"], "default": "px"},
    },
})

size.sanitize({"value": "100"})  # {"value": 100, "unit": "px"}
size.sanitize("not an object")   # {"value": 0, "unit": "px"}
```
"""

from ._types import UNDEFINED, TypeSpec
from .converters import MaskConfigurationError, construct_coercer, get_kind
from .core import Mask
from .loaders import load_config, load_config_from_file, validate_config_structure

__all__ = [
    # Core
    "Mask",
    "UNDEFINED",
    "TypeSpec",
    # Coercion
    "construct_coercer",
    "get_kind",
    "MaskConfigurationError",
    # Loaders
    "load_config",
    "load_config_from_file",
    "validate_config_structure",
]
