#!/usr/bin/env python
"""Export the database schema DDL compiled from the SQLAlchemy models."""

import sys
from pathlib import Path

# Add the src directory to the path so we can import the models
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gumboard.models import schema_statements


def main() -> None:
    """Export schema DDL to a SQL file."""
    output_path = Path(__file__).parent.parent / "schema.sql"

    with open(output_path, "w") as f:
        for statement in schema_statements():
            f.write(statement.strip())
            f.write(";\n\n")

    print(f"Schema exported to {output_path}")


if __name__ == "__main__":
    main()
