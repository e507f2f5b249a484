"""Console prompts and run rendering for the interactive dump processor."""

import sys
import traceback
from pathlib import Path
from typing import Any, Literal, cast

import questionary
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_bindings import merge_key_bindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.shortcuts import clear as clear_screen
from questionary.prompts.path import GreatUXPathCompleter
from questionary.question import Question
from tabulate import tabulate

from ton_dump_processor.processor import RunResult, wallet_id
from ton_dump_processor.reporters.address_frequency import build_address_rows
from ton_dump_processor.reporters.tax_summary import summaries_to_dataframe, summarize
from ton_dump_processor.settings import ProcessorSettings
from ton_dump_processor.validators import validate_input_dir

MainMenuAction = Literal["process", "show", "set_input_dir", "exit_app"]
BACK = "__back__"


def _ask(question: Question, escape_goes_back: bool = True) -> Any:
    """Ask question without key-sequence delay; ESC answers `__back__` unless disabled."""
    app = question.application
    if escape_goes_back:
        bindings = KeyBindings()

        @bindings.add("escape", eager=True)
        def _(event: KeyPressEvent) -> None:
            event.app.exit(result=BACK)

        app.key_bindings = merge_key_bindings([bindings, app.key_bindings])
    app.ttimeoutlen = app.timeoutlen = 0
    return question.unsafe_ask()


def prompt_for_main_menu_action(
    settings: ProcessorSettings,
    has_run_result: bool,
) -> MainMenuAction:
    """Clear the screen and ask which menu command to run."""
    clear_screen()
    question = questionary.select(
        f"TON Dump Processor [{settings.input_dir}]",
        choices=[
            questionary.Choice(
                "Process wallet dumps",
                "process",
                disabled=None if settings.input_dir.is_dir() else "Input directory not found",
            ),
            questionary.Choice(
                "Show last run",
                "show",
                disabled=None if has_run_result else "No processed run in this session",
            ),
            questionary.Choice("Change input directory", "set_input_dir"),
            questionary.Choice("Exit", "exit_app"),
        ],
        erase_when_done=True,
    )
    return cast(MainMenuAction, _ask(question, escape_goes_back=False))


def prompt_for_input_dir() -> str:
    """Ask for a dump directory; returns `__back__` on ESC."""
    question = questionary.text(
        "Input directory [esc to back]:",
        validate=validate_input_dir,
        completer=GreatUXPathCompleter(only_directories=True, expanduser=True),
        erase_when_done=True,
    )
    answer = _ask(question)
    return answer if answer == BACK else str(answer).strip()


def print_progress(index: int, total: int, path: Path) -> None:
    """Overwrite the status line with the dump currently being read."""
    sys.stdout.write(f"\r\x1b[2K[{index}/{total}] Processing {path.name}")
    sys.stdout.flush()


def clear_progress() -> None:
    sys.stdout.write("\r\x1b[2K")
    sys.stdout.flush()


def wait_for_back_navigation() -> None:
    questionary.press_any_key_to_continue("Press any key to return to the menu...").ask()


def format_run_result(result: RunResult, settings: ProcessorSettings) -> str:
    """Render files, tax summary and qualifying-address tables of one run."""
    aggregator = result.aggregator
    files_table = tabulate(
        [
            [path.name, len(aggregator.records_for(wallet_id(path))), "ok"]
            for path in result.processed_paths
        ]
        + [[error.path.name, 0, error.message] for error in result.errors],
        headers=["Dump", "Transactions", "Status"],
        tablefmt="simple_outline",
        disable_numparse=True,
    )
    df = summaries_to_dataframe(summarize(aggregator, settings.native_token), settings.native_token)
    summary_table = tabulate(
        df,
        headers="keys",
        tablefmt="simple_outline",
        showindex=True,
        disable_numparse=True,
        colalign=("left", *["right"] * len(df.columns)),
    )
    address_table = tabulate(
        [
            list(row.values())
            for row in build_address_rows(aggregator.qualified(settings.threshold))
        ],
        headers=["Address", "Txs", "First Seen", "Last Seen", "Category"],
        tablefmt="simple_outline",
        disable_numparse=True,
    )
    footer = (
        f"Processed {result.processed_files} file(s), failed {result.failed_files}. "
        f"Years: {', '.join(map(str, aggregator.years)) or '-'}. "
        f"Reports written to {settings.output_dir}"
    )
    return "\n".join([files_table, summary_table, address_table, footer])


def print_run_result(result: RunResult, settings: ProcessorSettings, logs: list[str]) -> None:
    """Print collected processing logs followed by the run tables."""
    print("\n".join([*logs, format_run_result(result, settings)]), flush=True)


def print_run_error(error: Exception) -> None:
    """Print the failure in red, traceback lines boxed under the error message."""
    frames = traceback.format_tb(error.__traceback__)
    table = tabulate(
        [[line] for frame in frames for line in frame.rstrip("\n").splitlines()],
        headers=[f"{type(error).__name__}: {error}"],
        tablefmt="simple_outline",
        disable_numparse=True,
    )
    print(f"\x1b[31m{table}\x1b[0m", flush=True)
