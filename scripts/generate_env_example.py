#!/usr/bin/env python3
"""Generate .env.example from HostaddrSettings fields.

This script introspects the Pydantic settings classes and generates
a documented .env.example file with all available environment variables.

Usage:
    python scripts/generate_env_example.py
"""

from __future__ import annotations

from pathlib import Path


def main(output: Path | None = None) -> int:
    """Generate .env.example (or `output`) from settings definitions."""
    from hostaddr.config import FormatSettings, LoggingSettings

    lines = [
        "# hostaddr Configuration",
        "# Auto-generated from settings definitions - DO NOT EDIT MANUALLY",
        "# Copy to .env and modify as needed",
        "",
    ]

    settings_sections = [
        ("Logging", LoggingSettings),
        ("Formatting", FormatSettings),
    ]

    for section_name, cls in settings_sections:
        lines.append(f"# === {section_name} ===")

        # Get the env_prefix from model_config
        model_config = getattr(cls, "model_config", {})
        prefix = model_config.get("env_prefix", "")

        for field_name, field_info in cls.model_fields.items():
            env_var = f"{prefix}{field_name.upper()}"
            default = field_info.default
            desc = field_info.description or ""

            val = "" if default is None else str(default)

            if desc:
                lines.append(f"# {desc}")

            lines.append(f"{env_var}={val}")

        lines.append("")

    if output is None:
        output = Path(__file__).parent.parent / ".env.example"
    output.write_text("\n".join(lines))
    print(f"Generated {output}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
