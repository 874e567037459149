#!/usr/bin/env python3
"""
Example usage of the JSON Builder.

This script builds a shape from a schema description and encodes a
value tree against it.
"""

from datetime import datetime, timezone
from json_builder import JSONBuilder, ShapeLoader


def main():
    """Main example function."""
    print("JSON Builder Example")
    print("=" * 50)

    schema = {
        "type": "structure",
        "members": {
            "name": {"type": "string", "serialized_name": "FullName"},
            "age": {"type": "integer"},
            "joined": {
                "type": "timestamp",
                "metadata": {"timestamp_format": "rfc822"}
            },
            "avatar": {"type": "blob"},
            "tags": {"type": "list", "members": {"type": "string"}},
            "friends": {
                "type": "map",
                "keys": {"type": "string"},
                "members": {
                    "type": "structure",
                    "members": {
                        "age": {"type": "integer", "serialized_name": "AGE"}
                    }
                }
            }
        }
    }

    params = {
        "name": "Alice Johnson",
        "age": 30,
        "joined": datetime(2023, 1, 1, tzinfo=timezone.utc),
        "avatar": b"hello",
        "tags": ["reading", "hiking"],
        "friends": {"Bob": {"age": 25}},
        "password": "never emitted"
    }

    shape = ShapeLoader().load(schema)
    print(shape.describe())
    print()

    builder = JSONBuilder(enable_profiling=True)
    print(builder.to_json(shape, params))
    print()
    print(builder.profiler.export_metrics("summary"))


if __name__ == "__main__":
    main()
