#!/usr/bin/env python3
"""
Round-trip Demo: Text → Properties → Text → YAML

Shows the full workflow:
1. Parse properties text (comments, continuations, escapes)
2. Inspect decoded values
3. Store them back with minimal escaping
4. Convert to nested YAML
"""

import logging

from nprops import Properties, PropertiesParseError
from nprops.serialization import properties_to_yaml

SAMPLE = r"""
projectName=NProps
# This is a comment.
    #This is too!
    whitespace   = not significant
key with spaces = value # still value
wrappedProperty = multi-\
                  line \
                  property \
                  value
windowsPath = C:\\Users\\Moonstroke\\dev\\nprops\\
db.host = localhost
db.port = 5432
padded = \  kept\ 
"""


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("ROUND-TRIP DEMO: Text → Properties → Text → YAML")
    print("=" * 80)

    print("\n1. PARSING...")
    props = Properties().load(SAMPLE)
    print(f"   ✓ Properties: {len(props)}")

    print("\n2. DECODED VALUES:")
    for key, value in props.items():
        print(f"   {key!r:24} → {value!r}")

    print("\n3. STORED TEXT:")
    print("-" * 80)
    print(props.dumps(comments="Generated by demo_roundtrip.py"))

    print("4. NESTED YAML:")
    print("-" * 80)
    print(properties_to_yaml(props, nested=True))

    print("5. ERROR REPORTING:")
    try:
        Properties().load("good = 1\nbad = \\x")
    except PropertiesParseError as e:
        print(f"   ✓ {e}")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()
