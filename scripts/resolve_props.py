#!/usr/bin/env python3
"""
Resolve VSCodeServer props.

Reads a props JSON file (camelCase keys), applies the defaults and prints the
resolved props, or the validation failure and the offending fields.

Usage: python scripts/resolve_props.py props.json
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from vscode_server.exceptions import ConfigurationError  # noqa: E402
from vscode_server.props import ResolvedVSCodeServerProps  # noqa: E402

if len(sys.argv) != 2:
    print(__doc__.strip().splitlines()[-1])
    sys.exit(2)

payload = Path(sys.argv[1]).read_text()

try:
    resolved = ResolvedVSCodeServerProps.from_json(payload)
except ConfigurationError as e:
    print(f"Invalid props: {e}")
    if e.fields:
        print(f"Fields: {', '.join(e.fields)}")
    sys.exit(1)

data = resolved.to_dict()
if data["vscodePassword"]:
    data["vscodePassword"] = "***"

print(json.dumps(data, indent=2))
print("=" * 60)
print(f"Instance type: {resolved.instance_type_name}")
print(f"Machine image: {resolved.ami_parameter_name}")
print(f"Password:      {'generated' if resolved.needs_generated_password else 'provided'}")
