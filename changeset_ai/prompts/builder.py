"""Prompt Builder - Construct the changeset suggestion prompt."""

import json

from changeset_ai import BUMP_TYPES

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "bumps": {
            "type": "object",
            "description": "An object where keys are the package names that have changed "
                           "and values are 'major', 'minor', or 'patch'.",
        },
        "summary": {
            "type": "string",
            "description": "A concise summary of the changes, suitable for a changelog.",
        },
    },
    "required": ["bumps", "summary"],
}


class PromptBuilder:
    """Constructs the single request sent to the model."""

    def build(self, diff_text: str, package_names: list[str]) -> str:
        sections = [
            self._build_role_section(),
            self._build_packages_section(package_names),
            self._build_diff_section(diff_text),
            self._build_format_section(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        levels = "\n".join(f"  - {level}: {desc}" for level, desc in BUMP_TYPES.items())
        return f"""You are an expert in semantic versioning and writing conventional commit messages.
Based on the changes, determine the appropriate semantic version bump for ONLY the packages that were actually changed.
Also, write a single, concise changelog summary for all the changes combined.

Bump levels:
{levels}"""

    def _build_packages_section(self, package_names: list[str]) -> str:
        return f"The project has these packages: {', '.join(package_names)}."

    def _build_diff_section(self, diff_text: str) -> str:
        return f"""The git diff is:
```diff
{diff_text}
```"""

    def _build_format_section(self) -> str:
        schema = json.dumps(RESPONSE_SCHEMA, indent=2)
        return f"""Respond with a JSON object that strictly follows this schema. Do not include any other text or explanation.

{schema}"""
