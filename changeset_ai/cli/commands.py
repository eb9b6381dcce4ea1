"""CLI Commands"""

import os
import sys

from changeset_ai.config import Config, get_config_path
from changeset_ai.credentials import CredentialStore, store_api_key
from changeset_ai.llm import LLMClient
from changeset_ai.output import bold, dim, info, print_success, print_error, print_warning
from changeset_ai.validators import ValidationError
from changeset_ai.workflow import Prompter


def display_config(config: Config, client: LLMClient | None, credentials: CredentialStore) -> int:
    """Display current configuration."""
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .changesetrc found)")

    env_provider = os.environ.get('CHANGESET_PROVIDER')
    env_model = os.environ.get('CHANGESET_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    CHANGESET_PROVIDER={env_provider}")
        if env_model:
            print(f"    CHANGESET_MODEL={env_model}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:        {info(config.provider)}")
    print(f"    model:           {info(config.model or 'default')}")
    print(f"    diff_timeout:    {info(str(config.diff_timeout))}s")
    print(f"    max_diff_bytes:  {info(str(config.max_diff_bytes))}")
    print(f"    request_timeout: {info(str(config.request_timeout))}s")
    print(f"    max_manifests:   {info(str(config.max_manifests))}")

    if client is not None:
        stored = credentials.get(client.credential_key) is not None
        print(f"    api key:         {info('stored' if stored else 'not set')}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .changesetrc (in current directory)")
    print(f"    Global: ~/.changesetrc\n")

    return 0


def run_set_key(prompter: Prompter, client: LLMClient, credentials: CredentialStore) -> int:
    """Prompt for an API key and store it after a format check."""
    value = prompter.ask_api_key(client.name)
    if not value:
        print(dim("Cancelled."))
        return 0
    try:
        store_api_key(credentials, client.credential_key, value, client.key_pattern)
    except ValidationError as e:
        print_error(str(e))
        return 1
    print_success(f"{client.name} API key stored securely.")
    return 0


def run_clear_key(client: LLMClient, credentials: CredentialStore) -> int:
    """Remove the stored API key. Safe to run when none is stored."""
    if credentials.get(client.credential_key) is None:
        print_warning(f"No {client.name} API key is stored.")
        return 0
    credentials.delete(client.credential_key)
    print_success(f"{client.name} API key cleared.")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete changeset)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell changeset | Out-String | Invoke-Expression\n")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish changeset | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
