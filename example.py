#!/usr/bin/env python3
"""
Example usage of JSON Codable.

This script decodes an API-style document whose shape differs from the
schema (renamed keys, values buried in nested arrays, dates as text) and
encodes the result back to the source layout.
"""

import json
from datetime import datetime
from enum import Enum
from typing import List, Optional

from json_codable import (
    CodableAdapter,
    DefaultValue,
    JSONCodable,
    KeyPath,
    ProcessingError,
    compose,
    date_format,
)


class LeafSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Leaf(JSONCodable):
    transformers = {"is_attached": "isAttached"}

    size: LeafSize
    is_attached: bool


class Tree(JSONCodable):
    transformers = {
        "name": KeyPath("tree_names", "colloquial", 0),
        "scientific_name": KeyPath("tree_names", "scientific"),
        "planted_at": compose("planted", date_format("MM-dd-yyyy")),
        "leaves": Leaf.nested_list(),
        "region": DefaultValue("unknown"),
    }

    name: str
    scientific_name: Optional[str] = None
    age: int
    planted_at: datetime
    leaves: List[Leaf]
    region: str


def main():
    """Main example function."""
    print("JSON Codable Example")
    print("=" * 50)

    sample_data = {
        "tree_names": {
            "colloquial": ["pine", "big green"],
            "scientific": "piniferous scientificus"
        },
        "age": 121,
        "planted": "7-4-1896",
        "leaves": [
            {"size": "large", "isAttached": True},
            {"size": "small", "isAttached": False},
            {"size": "medium", "isAttached": True}
        ]
    }

    json_string = json.dumps(sample_data, indent=2)
    print(f"Source JSON:\n{json_string}\n")

    adapter = CodableAdapter()

    try:
        print("Rewritten by the transformer table:")
        print(json.dumps(adapter.alter(Tree, sample_data), indent=2) + "\n")

        tree = adapter.decode(Tree, json_string)
        print("✅ Decoded!")
        print(f"   Name: {tree.name} ({tree.scientific_name})")
        print(f"   Planted: {tree.planted_at.isoformat()}")
        print(f"   Region: {tree.region}")
        attached = sum(1 for leaf in tree.leaves if leaf.is_attached)
        print(f"   Leaves: {len(tree.leaves)} ({attached} attached)")

        encoded = adapter.encode_to_value(tree)
        print(f"\nEncoded back:\n{json.dumps(encoded, indent=2)}")

        print("\nDecoding a document with a missing field...")
        adapter.decode(Tree, {"tree_names": {"colloquial": ["oak"]}, "age": 3})

    except ProcessingError as e:
        print(f"❌ Processing error: {e}")
    except ValueError as e:
        print(f"❌ Decode failed: {e}")


if __name__ == "__main__":
    main()
