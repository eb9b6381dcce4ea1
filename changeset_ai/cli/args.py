"""CLI Argument Parsing"""

import argparse
import argcomplete

from changeset_ai import __version__
from changeset_ai.llm import PROVIDERS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='changeset',
        description='Create changeset files by hand or with an AI suggestion',
        epilog='Example: changeset --ai (suggest bumps from staged changes)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Workflow (manual when neither is given)
    workflow = parser.add_mutually_exclusive_group()
    workflow.add_argument('--ai', action='store_true', help='Suggest bumps and summary from staged changes')
    workflow.add_argument('--empty', action='store_true', help='Create a changeset with no package bumps')
    workflow.add_argument('--set-key', action='store_true', help='Store the API key for the AI provider')
    workflow.add_argument('--clear-key', action='store_true', help='Remove the stored API key')
    workflow.add_argument('--display-config', action='store_true', help='Show current configuration')
    workflow.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    # LLM options
    parser.add_argument('-p', '--provider', type=str, choices=sorted(PROVIDERS), help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')

    # Workspace / output
    parser.add_argument('-C', '--cwd', type=str, metavar='DIR', help='Workspace root (default: current directory)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging on stderr')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
