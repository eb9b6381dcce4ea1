"""
Changeset Generator

Create changeset files by hand or from an AI suggestion based on staged git changes.
"""

__version__ = "1.0.0"

# Centralized bump levels - single source of truth
# Used by: validators.py, prompts/builder.py, cli/prompter.py
BUMP_TYPES = {
    'major': 'Breaking change',
    'minor': 'New, backwards compatible functionality',
    'patch': 'Backwards compatible bug fix',
}

BUMP_TYPE_NAMES = list(BUMP_TYPES.keys())

# Changesets live in this directory at the workspace root
CHANGESET_DIR = ".changeset"
MANIFEST_FILENAME = "package.json"
