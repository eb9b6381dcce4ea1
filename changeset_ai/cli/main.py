"""CLI Main Entry Point"""

import os
import sys
from pathlib import Path

from changeset_ai.config import Config, load_config
from changeset_ai.credentials import FileCredentialStore
from changeset_ai.llm import LLMError, get_client
from changeset_ai.log import configure_logging
from changeset_ai.output import dim, print_error, print_success
from changeset_ai.workflow import ChangesetWorkflow, Status, WorkflowKind, WorkflowResult

from changeset_ai.cli.args import parse_args
from changeset_ai.cli.commands import display_config, run_clear_key, run_install_completion, run_set_key
from changeset_ai.cli.prompter import TerminalPrompter


def _apply_overrides(args, config: Config) -> Config:
    """Resolve provider and model.

    Precedence: CLI args > environment variables > config file
    """
    config.provider = args.provider or os.environ.get('CHANGESET_PROVIDER') or config.provider
    config.model = args.model or os.environ.get('CHANGESET_MODEL') or config.model
    for warning in config.validate():
        print(f"Config warning: {warning}", file=sys.stderr)
    return config


def _workflow_kind(args) -> WorkflowKind:
    if args.ai:
        return WorkflowKind.AI
    if args.empty:
        return WorkflowKind.EMPTY
    return WorkflowKind.MANUAL


def _report(result: WorkflowResult) -> int:
    if result.status == Status.CREATED:
        print_success(f"{result.message} {dim(str(result.path))}")
        return 0
    if result.status == Status.CANCELLED:
        print(dim(result.message))
        return 0
    print_error(result.message)
    return 1


def _handle_key_commands(args, config, prompter, credentials) -> int:
    try:
        client = get_client(config.provider, config.model, config.request_timeout)
    except LLMError as e:
        print_error(str(e))
        return 1
    if args.set_key:
        return run_set_key(prompter, client, credentials)
    return run_clear_key(client, credentials)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if args.install_completion:
        return run_install_completion()

    config = _apply_overrides(args, load_config())
    credentials = FileCredentialStore()
    prompter = TerminalPrompter()

    if args.display_config:
        try:
            client = get_client(config.provider, config.model, config.request_timeout)
        except LLMError:
            client = None
        return display_config(config, client, credentials)

    if args.set_key or args.clear_key:
        return _handle_key_commands(args, config, prompter, credentials)

    root = Path(args.cwd) if args.cwd else Path.cwd()
    workflow = ChangesetWorkflow(root, prompter, credentials, config)
    return _report(workflow.run(_workflow_kind(args)))


if __name__ == "__main__":
    sys.exit(main())
